"""Game lifecycle: start, remove, and read content text."""

from __future__ import annotations

import logging
from uuid import UUID

from wayfarer.errors import NotFoundError, PreconditionError
from wayfarer.models import Game
from wayfarer.scripting import execute_script
from wayfarer.storage import Storage

from .resolver import get_source_for_key
from .transition import now_ms

logger = logging.getLogger(__name__)


def start_game(
    storage: Storage,
    adventure_id: int,
    timestamp: int | None = None,
    language: str | None = None,
) -> Game:
    """Start a game at the adventure's initial location.

    Runs the adventure's initialization script, then records content for the
    adventure's initial text (when set) and the initial location's text.
    """
    with storage.transaction():
        adventure = storage.adventures.get(adventure_id)
        if adventure is None:
            raise NotFoundError(f"Adventure {adventure_id} not found")
        location = storage.locations.get_initial(adventure_id)
        if location is None:
            raise PreconditionError(f"Adventure {adventure_id} has no initial location")

        game = storage.games.add(Game(
            adventure_id=adventure.id,
            location_id=location.id,
            language=storage.settings.resolve_language(language),
            location_update_timestamp=now_ms() if timestamp is None else timestamp,
        ))
        if adventure.initialization_script_id is not None:
            execute_script(storage, adventure.initialization_script_id, game)

        if adventure.initial_source_key is not None:
            storage.contents.add_for_game(game, adventure.initial_source_key)
        if location.source_key is not None:
            storage.contents.add_for_game(game, location.source_key)

    logger.info("Game %d started for adventure %d", game.id, adventure.id)
    return game


def remove_game(storage: Storage, game_id: int) -> None:
    """Remove a game and its content."""
    with storage.transaction():
        game = storage.games.get(game_id)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found")
        storage.contents.remove_all_for_game(game.id)
        storage.games.remove(game)
    logger.info("Game %d removed", game_id)


def remove_games(storage: Storage, game_ids: list[int]) -> None:
    with storage.transaction():
        for game_id in game_ids:
            remove_game(storage, game_id)


def get_content_text_for_key(storage: Storage, game_id: int, source_key: UUID) -> str | None:
    """Processed text for `source_key` in the game's language, or None."""
    game = storage.games.get(game_id)
    if game is None:
        raise NotFoundError(f"Game {game_id} not found")
    with storage.transaction():
        source = get_source_for_key(
            storage, source_key, game.adventure_id, game.language, processed=True, game=game
        )
    return source.text if source else None
