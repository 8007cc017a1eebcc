"""Route repository. Routes belong to adventures through their origin location."""

from __future__ import annotations

from uuid import UUID

from wayfarer.models import Route

from .core import JsonStore, Table
from .locations import LocationsRepository


class RoutesRepository(Table[Route]):
    name = "routes"
    model = Route

    def __init__(self, store: JsonStore, locations: LocationsRepository) -> None:
        super().__init__(store)
        self._locations = locations

    def _adventure_location_ids(self, adventure_id: int) -> set[int]:
        return {loc.id for loc in self._locations.list_for_adventure(adventure_id)}

    def list_for_location(self, location_id: int) -> list[Route]:
        return sorted(
            self._where(lambda r: r.location_id == location_id), key=lambda r: r.id
        )

    def list_for_adventure(self, adventure_id: int) -> list[Route]:
        location_ids = self._adventure_location_ids(adventure_id)
        return sorted(
            self._where(lambda r: r.location_id in location_ids), key=lambda r: r.id
        )

    def list(
        self,
        location_id: int | None = None,
        adventure_id: int | None = None,
        destination_location_id: int | None = None,
    ) -> list[Route]:
        """List routes matching every filter that is given."""
        routes = sorted(self._rows().values(), key=lambda r: r.id)
        if location_id is not None:
            routes = [r for r in routes if r.location_id == location_id]
        if adventure_id is not None:
            location_ids = self._adventure_location_ids(adventure_id)
            routes = [r for r in routes if r.location_id in location_ids]
        if destination_location_id is not None:
            routes = [
                r for r in routes if r.destination_location_id == destination_location_id
            ]
        return routes

    def remove_for_location_except(self, location_id: int, keep_ids: list[int]) -> list[Route]:
        """Remove a location's routes whose ids are not in `keep_ids`. Returns the removed."""
        removed = [r for r in self.list_for_location(location_id) if r.id not in keep_ids]
        self.remove_many(removed)
        return removed

    def find_by_script(self, script_id: int) -> list[Route]:
        return self._where(lambda r: r.route_taken_script_id == script_id)

    def find_by_source_key(self, key: UUID) -> list[Route]:
        return self._where(lambda r: key in (r.source_key, r.route_taken_source_key))

    def uses_source(self, adventure_id: int, key: UUID) -> bool:
        return any(
            key in (r.source_key, r.route_taken_source_key)
            for r in self.list_for_adventure(adventure_id)
        )
