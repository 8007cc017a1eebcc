from types import SimpleNamespace
from uuid import uuid4

import pytest

from wayfarer.config import Settings
from wayfarer.models import Adventure, Location, Route, Script, Source
from wayfarer.storage import Storage


@pytest.fixture
def storage(tmp_path):
    """Fresh storage over an empty data directory per test."""
    return Storage(tmp_path / "data", Settings(data_dir=tmp_path / "data"))


@pytest.fixture
def world(storage):
    """A two-location adventure, committed to disk.

    start --(route)--> end, with English text for every key.
    """
    with storage.transaction():
        adventure = storage.adventures.add(Adventure(name="Test Adventure"))

        def text(body: str, language: str = "en") -> Source:
            with storage.transaction():
                return storage.sources.add(Source(
                    key=uuid4(), adventure_id=adventure.id, name=f"text{len(storage.sources)}",
                    text=body, language=language,
                ))

        start = storage.locations.add(Location(
            adventure_id=adventure.id, name="start", initial=True,
            source_key=text("You are at the start.").key,
        ))
        end = storage.locations.add(Location(
            adventure_id=adventure.id, name="end", final=True,
            source_key=text("You reached the end.").key,
        ))
        route = storage.routes.add(Route(
            location_id=start.id, destination_location_id=end.id, name="go",
            source_key=text("Go onward").key,
            route_taken_source_key=text("You walk onward.").key,
        ))

    def script(content: str, name: str = "") -> Script:
        with storage.transaction():
            return storage.scripts.add(
                Script(adventure_id=adventure.id, name=name, content=content)
            )

    return SimpleNamespace(
        storage=storage, adventure=adventure, start=start, end=end, route=route,
        text=text, script=script,
    )
