"""Source (keyed narrative text) repository.

One row per (key, language). Rows that share a key are translations of the
same text. The nil UUID is the key of global text that any adventure may use,
so lookups for it ignore the adventure filter.
"""

from __future__ import annotations

import logging
from uuid import UUID

from wayfarer.config import Settings
from wayfarer.models import Source

from .core import JsonStore, Table

logger = logging.getLogger(__name__)

NIL_KEY = UUID(int=0)


class SourcesRepository(Table[Source]):
    name = "sources"
    model = Source

    def __init__(self, store: JsonStore, settings: Settings) -> None:
        super().__init__(store)
        self._settings = settings

    def get_text_for_key(self, key: UUID, language: str | None = None) -> str | None:
        language = self._settings.resolve_language(language)
        for source in self._rows().values():
            if source.key == key and source.language == language:
                return source.text
        return None

    def get_for_key(
        self, key: UUID, adventure_id: int | None, language: str | None
    ) -> Source | None:
        """Full record for a key in a language.

        A None `adventure_id` or the nil key matches sources of any adventure.
        """
        language = self._settings.resolve_language(language)
        match_any_adventure = adventure_id is None or key == NIL_KEY
        for source in self._rows().values():
            if source.key != key or source.language != language:
                continue
            if match_any_adventure or source.adventure_id == adventure_id:
                return source
        return None

    def get_by_id(self, source_id: int, language: str | None = None) -> Source | None:
        source = self.get(source_id)
        if source is None:
            return None
        if language is not None and source.language != self._settings.resolve_language(language):
            return None
        return source

    def add(self, row: Source, language: str | None = None) -> Source:
        """Store a source, defaulting its language when neither it nor `language` set one."""
        row.language = self._settings.resolve_language(language or row.language or None)
        stored = super().add(row)
        logger.info("Source %s added (%s)", stored.key, stored.language)
        return stored

    def remove_source(self, source_id: int, language: str | None) -> Source | None:
        source = self.get_by_id(source_id, language)
        if source is not None:
            self.remove(source)
        return source

    def remove_all_for_adventure(self, adventure_id: int) -> int:
        sources = self._where(lambda s: s.adventure_id == adventure_id)
        self.remove_many(sources)
        return len(sources)

    def list_for_adventure(self, adventure_id: int, language: str | None) -> list[Source]:
        language = self._settings.resolve_language(language)
        return sorted(
            self._where(lambda s: s.adventure_id == adventure_id and s.language == language),
            key=lambda s: s.id,
        )

    def list_all_languages_for_adventure(self, adventure_id: int) -> list[Source]:
        return sorted(
            self._where(lambda s: s.adventure_id == adventure_id), key=lambda s: s.id
        )

    def list_for_key(self, key: UUID) -> list[Source]:
        """Every language variant of a key."""
        return sorted(self._where(lambda s: s.key == key), key=lambda s: s.id)

    def find_by_script(self, script_id: int) -> list[Source]:
        return self._where(lambda s: s.script_id == script_id)

    def uses_source(self, adventure_id: int, key: UUID) -> bool:
        return any(
            s.key == key for s in self.list_all_languages_for_adventure(adventure_id)
        )
