"""Tests for adventure, location, route, game and object repositories."""

from uuid import uuid4

import pytest

from wayfarer.errors import PreconditionError
from wayfarer.models import Adventure, AdventureObject, Game, Location, Route, Source


# ── Adventures ────────────────────────────────────────────


def test_adventure_lookup_and_filter(storage):
    a = storage.adventures.add(Adventure(name="Sea Caves"))
    storage.adventures.add(Adventure(name="Mountain Pass"))
    assert storage.adventures.get_by_name("Sea Caves") is a
    assert [x.name for x in storage.adventures.list("cave")] == ["Sea Caves"]
    assert len(storage.adventures.list()) == 2


def test_adventure_script_and_source_references(storage):
    key = uuid4()
    a = storage.adventures.add(Adventure(
        name="A", initialization_script_id=3, description_source_key=key
    ))
    assert storage.adventures.find_by_script(3) == [a]
    assert storage.adventures.find_by_source_key(key) == [a]
    assert storage.adventures.uses_source(a.id, key)
    assert not storage.adventures.uses_source(a.id, uuid4())


# ── Locations and routes ──────────────────────────────────


def test_initial_location(storage):
    storage.locations.add(Location(adventure_id=1, name="hall"))
    gate = storage.locations.add(Location(adventure_id=1, name="gate", initial=True))
    assert storage.locations.get_initial(1) is gate
    assert storage.locations.get_initial(2) is None


def test_location_references(storage):
    key = uuid4()
    loc = storage.locations.add(Location(adventure_id=1, exit_script_id=5, source_key=key))
    assert storage.locations.find_by_script(5) == [loc]
    assert storage.locations.find_by_source_key(key) == [loc]
    assert storage.locations.uses_source(1, key)


def test_routes_by_location_and_adventure(storage):
    a = storage.locations.add(Location(adventure_id=1))
    b = storage.locations.add(Location(adventure_id=1))
    c = storage.locations.add(Location(adventure_id=2))
    ab = storage.routes.add(Route(location_id=a.id, destination_location_id=b.id))
    ba = storage.routes.add(Route(location_id=b.id, destination_location_id=a.id))
    storage.routes.add(Route(location_id=c.id, destination_location_id=c.id))

    assert storage.routes.list_for_location(a.id) == [ab]
    assert storage.routes.list_for_adventure(1) == [ab, ba]
    assert storage.routes.list(adventure_id=1, destination_location_id=a.id) == [ba]


def test_remove_routes_except(storage):
    a = storage.locations.add(Location(adventure_id=1))
    keep = storage.routes.add(Route(location_id=a.id, destination_location_id=a.id))
    drop = storage.routes.add(Route(location_id=a.id, destination_location_id=a.id))
    assert storage.routes.remove_for_location_except(a.id, [keep.id]) == [drop]
    assert storage.routes.list_for_location(a.id) == [keep]


def test_route_references(storage):
    a = storage.locations.add(Location(adventure_id=1))
    taken = uuid4()
    route = storage.routes.add(Route(
        location_id=a.id, destination_location_id=a.id,
        route_taken_source_key=taken, route_taken_script_id=8,
    ))
    assert storage.routes.find_by_script(8) == [route]
    assert storage.routes.find_by_source_key(taken) == [route]
    assert storage.routes.uses_source(1, taken)
    assert not storage.routes.uses_source(2, taken)


# ── Games ─────────────────────────────────────────────────


def test_games_filter(storage):
    g1 = storage.games.add(Game(adventure_id=1, location_id=3))
    g2 = storage.games.add(Game(adventure_id=1, location_id=4))
    storage.games.add(Game(adventure_id=2))
    assert storage.games.list_for_adventure(1) == [g1, g2]
    assert storage.games.list(adventure_id=1, location_id=4) == [g2]


# ── Objects ───────────────────────────────────────────────


def test_objects_by_location(storage):
    lamp = storage.objects.add(AdventureObject(adventure_id=1, name="lamp", location_ids=[3]))
    storage.objects.add(AdventureObject(adventure_id=1, name="rope", location_ids=[4]))
    assert storage.objects.list_for_location(3) == [lamp]
    assert len(storage.objects.list_for_adventure(1)) == 2


def test_objects_with_sources_in_language(storage):
    name_key, desc_key = uuid4(), uuid4()
    for key, text, language in (
        (name_key, "lamp", "en"), (name_key, "lámpara", "es"), (desc_key, "brass", "en"),
    ):
        storage.sources.add(Source(key=key, adventure_id=1, text=text, language=language))
    lamp = storage.objects.add(AdventureObject(
        adventure_id=1, name_source_key=name_key, description_source_key=desc_key,
    ))

    [found] = storage.objects.get_with_sources([lamp.id, 999], "es")
    assert found.adventure_object == lamp
    assert found.name_source.text == "lámpara"
    assert found.description_source is None


def test_objects_with_sources_unknown_language_raises(storage):
    with pytest.raises(PreconditionError):
        storage.objects.get_with_sources([1], "zz")
