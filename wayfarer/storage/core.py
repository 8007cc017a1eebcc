"""JSON table files, the unit of work, and the repository base class."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class JsonStore:
    """Unit of work over a directory of JSON table files.

    Tables are loaded lazily and kept in memory; repositories hand out the
    live model instances, so edits made to a returned row are pending until
    `save_changes()`. `rollback()` throws every pending change away.

    Table file format: {"next_id": <int>, "rows": [<row>, ...]}
    """

    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        self._base.mkdir(parents=True, exist_ok=True)
        self._tables: dict[str, dict[int, BaseModel]] = {}
        self._next_ids: dict[str, int] = {}
        self._depth = 0

    @property
    def base_path(self) -> Path:
        return self._base

    def _table_path(self, name: str) -> Path:
        return self._base / f"{name}.json"

    def rows(self, name: str, model: type[M]) -> dict[int, M]:
        """Return the id → row mapping for a table, loading it on first use."""
        if name not in self._tables:
            path = self._table_path(name)
            rows: dict[int, BaseModel] = {}
            next_id = 1
            if path.is_file():
                data = json.loads(path.read_text())
                for raw in data["rows"]:
                    row = model.model_validate(raw)
                    rows[row.id] = row
                next_id = data.get("next_id", max(rows, default=0) + 1)
            self._tables[name] = rows
            self._next_ids[name] = next_id
        return self._tables[name]  # type: ignore[return-value]

    def allocate_id(self, name: str) -> int:
        next_id = self._next_ids[name]
        self._next_ids[name] = next_id + 1
        return next_id

    def claim_id(self, name: str, row_id: int) -> None:
        """Keep the id sequence ahead of an explicitly chosen id."""
        if row_id >= self._next_ids[name]:
            self._next_ids[name] = row_id + 1

    def save_changes(self) -> None:
        """Write every loaded table to disk.

        All tables are serialized to temp files before any is swapped in, so a
        failure while writing leaves every table file as it was. Each swap is an
        atomic `os.replace`, but the swaps happen one table at a time: a crash
        between two of them can leave some tables at the new state and the
        rest at the old one.
        """
        staged: list[tuple[Path, Path]] = []
        try:
            for name, rows in self._tables.items():
                data = {
                    "next_id": self._next_ids[name],
                    "rows": [row.model_dump(mode="json") for row in rows.values()],
                }
                path = self._table_path(name)
                tmp = path.with_suffix(".json.tmp")
                staged.append((tmp, path))
                tmp.write_text(json.dumps(data, indent=2))
        except BaseException:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise
        for tmp, path in staged:
            os.replace(tmp, path)
        logger.debug("saved %d tables under %s", len(self._tables), self._base)

    def rollback(self) -> None:
        """Drop pending changes; the next read reloads from disk."""
        self._tables.clear()
        self._next_ids.clear()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back on any exception.

        Nested transactions join the outermost one, which alone commits.
        """
        self._depth += 1
        try:
            yield
        except BaseException:
            if self._depth == 1:
                self.rollback()
            raise
        else:
            if self._depth == 1:
                self.save_changes()
        finally:
            self._depth -= 1


class Table(Generic[M]):
    """Repository base: typed access to one JSON table."""

    name: str
    model: type[M]

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    def _rows(self) -> dict[int, M]:
        return self._store.rows(self.name, self.model)

    def _where(self, predicate: Callable[[M], bool]) -> list[M]:
        return [row for row in self._rows().values() if predicate(row)]

    def get(self, row_id: int | None) -> M | None:
        if row_id is None:
            return None
        return self._rows().get(row_id)

    def all(self) -> list[M]:
        return list(self._rows().values())

    def add(self, row: M) -> M:
        """Store a new row, assigning its id. Returns the stored row."""
        rows = self._rows()
        if not getattr(row, "id", 0):
            row.id = self._store.allocate_id(self.name)  # type: ignore[attr-defined]
        else:
            self._store.claim_id(self.name, row.id)  # type: ignore[attr-defined]
        rows[row.id] = row  # type: ignore[attr-defined]
        return row

    def remove(self, row: M) -> None:
        self._rows().pop(row.id, None)  # type: ignore[attr-defined]

    def remove_many(self, rows: list[M]) -> None:
        for row in rows:
            self.remove(row)

    def __len__(self) -> int:
        return len(self._rows())
