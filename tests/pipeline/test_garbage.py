"""Tests for finding unreferenced sources."""

import pytest

from wayfarer.errors import NotFoundError
from wayfarer.models import Game, Script, Source
from wayfarer.pipeline import find_unreferenced_sources


def test_only_unreferenced_key_reported(world):
    storage = world.storage
    orphan = world.text("nobody points here")
    assert find_unreferenced_sources(storage, world.adventure.id) == [orphan]


def test_every_language_of_orphan_reported(world):
    orphan = world.text("orphan")
    with world.storage.transaction():
        spanish = world.storage.sources.add(Source(
            key=orphan.key, adventure_id=world.adventure.id, text="huérfano", language="es",
        ))
    assert find_unreferenced_sources(world.storage, world.adventure.id) == [orphan, spanish]


def test_adventure_keys_count(world):
    intro, description = world.text("intro"), world.text("about")
    with world.storage.transaction():
        world.adventure.initial_source_key = intro.key
        world.adventure.description_source_key = description.key
    assert find_unreferenced_sources(world.storage, world.adventure.id) == []


def test_content_keys_count(world):
    storage = world.storage
    shown = world.text("shown once")
    with storage.transaction():
        game = storage.games.add(Game(adventure_id=world.adventure.id))
        storage.contents.add_for_game(game, shown.key)
    assert find_unreferenced_sources(storage, world.adventure.id) == []


def test_literal_key_in_script_counts(world):
    bootstrapped = world.text("set by script")
    world.script(f'local key = "{bootstrapped.key}"')
    assert find_unreferenced_sources(world.storage, world.adventure.id) == []


def test_other_adventures_scripts_do_not_count(world):
    storage = world.storage
    orphan = world.text("orphan")
    with storage.transaction():
        storage.scripts.add(Script(adventure_id=world.adventure.id + 1, content=str(orphan.key)))
    assert find_unreferenced_sources(storage, world.adventure.id) == [orphan]


def test_not_transitive_through_objects(world):
    name = world.text("lamp")
    world.text("A {object:1} here.")
    found = find_unreferenced_sources(world.storage, world.adventure.id)
    assert name in found


def test_unknown_adventure_raises(storage):
    with pytest.raises(NotFoundError):
        find_unreferenced_sources(storage, 999)
