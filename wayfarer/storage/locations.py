"""Location repository."""

from __future__ import annotations

from uuid import UUID

from wayfarer.models import Location

from .core import Table


class LocationsRepository(Table[Location]):
    name = "locations"
    model = Location

    def get_initial(self, adventure_id: int) -> Location | None:
        for location in self.list_for_adventure(adventure_id):
            if location.initial:
                return location
        return None

    def list_for_adventure(self, adventure_id: int) -> list[Location]:
        return sorted(
            self._where(lambda loc: loc.adventure_id == adventure_id),
            key=lambda loc: loc.id,
        )

    def find_by_script(self, script_id: int) -> list[Location]:
        """Locations using the script on enter or exit."""
        return self._where(
            lambda loc: script_id in (loc.enter_script_id, loc.exit_script_id)
        )

    def find_by_source_key(self, key: UUID) -> list[Location]:
        return self._where(lambda loc: loc.source_key == key)

    def uses_source(self, adventure_id: int, key: UUID) -> bool:
        return any(
            loc.source_key == key for loc in self.list_for_adventure(adventure_id)
        )
