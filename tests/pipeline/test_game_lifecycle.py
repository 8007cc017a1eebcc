"""Tests for starting, removing and reading games."""

from uuid import uuid4

import pytest

from wayfarer.errors import NotFoundError, PreconditionError
from wayfarer.models import Adventure, Location, Source
from wayfarer.pipeline import get_content_text_for_key, remove_game, remove_games, start_game


def test_start_unknown_adventure_raises(storage):
    with pytest.raises(NotFoundError):
        start_game(storage, 42)


def test_start_without_initial_location_raises(storage):
    with storage.transaction():
        adventure = storage.adventures.add(Adventure(name="Empty"))
        storage.locations.add(Location(adventure_id=adventure.id))

    with pytest.raises(PreconditionError):
        start_game(storage, adventure.id)
    assert storage.games.all() == []


def test_start_with_init_script(world):
    storage = world.storage
    with storage.transaction():
        world.adventure.initial_source_key = world.text("Welcome.").key
        world.adventure.initialization_script_id = world.script(
            "function run() game:SetGameStatePropertyBoolean('GameInitialized', true) end"
        ).id

    game = start_game(storage, world.adventure.id)

    assert game.adventure_id == world.adventure.id
    assert game.location_id == world.start.id
    assert game.location_update_timestamp > 0
    assert game.language == "en"
    assert game.model_dump(mode="json")["game_state"] == '{"GameInitialized":true}'
    assert [c.source_key for c in storage.contents.get_all(game.id)] == [
        world.adventure.initial_source_key, world.start.source_key,
    ]


def test_start_without_init_script(world):
    game = start_game(world.storage, world.adventure.id, timestamp=99)
    assert game.location_update_timestamp == 99
    assert game.game_state == {}
    assert [c.source_key for c in world.storage.contents.get_all(game.id)] == [
        world.start.source_key,
    ]


def test_start_keeps_explicit_zero_timestamp(world):
    assert start_game(world.storage, world.adventure.id, timestamp=0).location_update_timestamp == 0


def test_start_with_language(world):
    assert start_game(world.storage, world.adventure.id, language="es").language == "es"
    with pytest.raises(PreconditionError):
        start_game(world.storage, world.adventure.id, language="xx")


def test_start_is_persisted(world):
    game = start_game(world.storage, world.adventure.id)
    world.storage.rollback()
    assert world.storage.games.get(game.id) is not None
    assert len(world.storage.contents.get_all(game.id)) == 1


# ── Removal ───────────────────────────────────────────────


def test_remove_game_removes_content(world):
    game = start_game(world.storage, world.adventure.id)
    other = start_game(world.storage, world.adventure.id)

    remove_game(world.storage, game.id)

    assert world.storage.games.get(game.id) is None
    assert world.storage.contents.get_all(game.id) == []
    assert len(world.storage.contents.get_all(other.id)) == 1


def test_remove_unknown_game_raises(storage):
    with pytest.raises(NotFoundError):
        remove_game(storage, 7)


def test_remove_games_is_all_or_nothing(world):
    game = start_game(world.storage, world.adventure.id)
    with pytest.raises(NotFoundError):
        remove_games(world.storage, [game.id, 999])
    assert world.storage.games.get(game.id) is not None


# ── Content text ──────────────────────────────────────────


def test_content_text_processed_in_game_language(world):
    key = uuid4()
    with world.storage.transaction():
        for text, language in (("english", "en"), ("{script: return 'hola' }", "es")):
            world.storage.sources.add(Source(
                key=key, adventure_id=world.adventure.id, text=text, language=language,
            ))
    game = start_game(world.storage, world.adventure.id, language="es")

    assert get_content_text_for_key(world.storage, game.id, key) == "hola"


def test_content_text_missing_key(world):
    game = start_game(world.storage, world.adventure.id)
    assert get_content_text_for_key(world.storage, game.id, uuid4()) is None


def test_content_text_unknown_game(storage):
    with pytest.raises(NotFoundError):
        get_content_text_for_key(storage, 5, uuid4())
