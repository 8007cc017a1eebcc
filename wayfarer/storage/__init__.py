"""File-based JSON storage: one table file per entity.

Data layout:
  data/
    adventures.json         Adventures
    locations.json          Locations (graph nodes)
    routes.json             Routes (directed edges between locations)
    scripts.json            Lua scripts
    script_includes.json    Ordered include edges between scripts
    sources.json            Keyed narrative text, one row per (key, language)
    adventure_objects.json  In-world objects and the locations holding them
    games.json              Playthroughs, with their game-state blob
    contents.json           Append-only content log of every game

Each file is {"next_id": <int>, "rows": [...]}. Tables load on first use and
stay in memory; repositories return live rows, so edits are pending until
`save_changes()` and vanish on `rollback()`. Wrap each operation in
`with storage.transaction():` to get all-or-nothing writes.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from wayfarer.config import Settings

from .adventures import AdventuresRepository
from .contents import ContentsRepository
from .core import JsonStore, Table  # noqa: F401
from .games import GamesRepository
from .locations import LocationsRepository
from .objects import ObjectsRepository
from .routes import RoutesRepository
from .scripts import ScriptsRepository
from .sources import NIL_KEY, SourcesRepository  # noqa: F401


class Storage:
    """Every repository over one data directory, sharing one unit of work."""

    def __init__(self, base_path: Path, settings: Settings | None = None) -> None:
        self.settings = settings or Settings(data_dir=base_path)
        self._store = JsonStore(base_path)
        self.adventures = AdventuresRepository(self._store)
        self.locations = LocationsRepository(self._store)
        self.routes = RoutesRepository(self._store, self.locations)
        self.scripts = ScriptsRepository(self._store)
        self.sources = SourcesRepository(self._store, self.settings)
        self.games = GamesRepository(self._store)
        self.contents = ContentsRepository(self._store, self.games)
        self.objects = ObjectsRepository(self._store, self.sources, self.settings)

    @property
    def base_path(self) -> Path:
        return self._store.base_path

    def save_changes(self) -> None:
        self._store.save_changes()

    def rollback(self) -> None:
        self._store.rollback()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._store.transaction():
            yield
