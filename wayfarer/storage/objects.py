"""Adventure object repository and batch name/description lookup."""

from __future__ import annotations

from uuid import UUID

from wayfarer.config import Settings
from wayfarer.models import AdventureObject, ObjectWithSources, Source

from .core import JsonStore, Table
from .sources import SourcesRepository


class ObjectsRepository(Table[AdventureObject]):
    name = "adventure_objects"
    model = AdventureObject

    def __init__(
        self, store: JsonStore, sources: SourcesRepository, settings: Settings
    ) -> None:
        super().__init__(store)
        self._sources = sources
        self._settings = settings

    def list_for_adventure(self, adventure_id: int) -> list[AdventureObject]:
        return sorted(
            self._where(lambda o: o.adventure_id == adventure_id), key=lambda o: o.id
        )

    def list_for_location(self, location_id: int) -> list[AdventureObject]:
        return sorted(
            self._where(lambda o: location_id in o.location_ids), key=lambda o: o.id
        )

    def remove_all_for_adventure(self, adventure_id: int) -> int:
        objects = self.list_for_adventure(adventure_id)
        self.remove_many(objects)
        return len(objects)

    def get_with_sources(
        self, object_ids: list[int], language: str | None
    ) -> list[ObjectWithSources]:
        """Objects among `object_ids` that exist, each with its text in `language`.

        Raises PreconditionError for an unrecognized language code.
        """
        language = self._settings.resolve_language(language)
        found: list[ObjectWithSources] = []
        for object_id in dict.fromkeys(object_ids):
            obj = self.get(object_id)
            if obj is None:
                continue
            found.append(ObjectWithSources(
                adventure_object=obj,
                name_source=self._source(obj.name_source_key, obj.adventure_id, language),
                description_source=self._source(
                    obj.description_source_key, obj.adventure_id, language
                ),
            ))
        return found

    def _source(self, key: UUID | None, adventure_id: int, language: str) -> Source | None:
        if key is None:
            return None
        return self._sources.get_for_key(key, adventure_id, language)
