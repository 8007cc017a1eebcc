"""Game repository."""

from __future__ import annotations

from wayfarer.models import Game

from .core import Table


class GamesRepository(Table[Game]):
    name = "games"
    model = Game

    def list_for_adventure(self, adventure_id: int) -> list[Game]:
        return sorted(
            self._where(lambda g: g.adventure_id == adventure_id), key=lambda g: g.id
        )

    def list(
        self, adventure_id: int | None = None, location_id: int | None = None
    ) -> list[Game]:
        games = sorted(self._rows().values(), key=lambda g: g.id)
        if adventure_id is not None:
            games = [g for g in games if g.adventure_id == adventure_id]
        if location_id is not None:
            games = [g for g in games if g.location_id == location_id]
        return games
