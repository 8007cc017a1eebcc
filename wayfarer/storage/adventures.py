"""Adventure repository."""

from __future__ import annotations

from uuid import UUID

from wayfarer.models import Adventure

from .core import Table


class AdventuresRepository(Table[Adventure]):
    name = "adventures"
    model = Adventure

    def get_by_name(self, name: str) -> Adventure | None:
        for adventure in self._rows().values():
            if adventure.name == name:
                return adventure
        return None

    def list(self, name_contains: str | None = None) -> list[Adventure]:
        """List adventures sorted by id, optionally filtered by a name substring."""
        adventures = sorted(self._rows().values(), key=lambda a: a.id)
        if name_contains:
            needle = name_contains.lower()
            adventures = [a for a in adventures if needle in a.name.lower()]
        return adventures

    def find_by_script(self, script_id: int) -> list[Adventure]:
        """Adventures using the script for initialization or termination."""
        return self._where(
            lambda a: script_id in (a.initialization_script_id, a.termination_script_id)
        )

    def find_by_source_key(self, key: UUID) -> list[Adventure]:
        return self._where(
            lambda a: key in (a.initial_source_key, a.description_source_key)
        )

    def uses_source(self, adventure_id: int, key: UUID) -> bool:
        adventure = self.get(adventure_id)
        if adventure is None:
            return False
        return key in (adventure.initial_source_key, adventure.description_source_key)
