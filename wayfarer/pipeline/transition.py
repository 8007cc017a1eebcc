"""Location transition: move a game along a route.

Stages, in order:
  at_origin         Game and route loaded; the game must stand on the route's origin.
  exit_run          Origin location's exit script, if any.
  route_run         Route-taken script, if any; then content for the route-taken text.
  location_updated  Game moved to the destination, timestamp updated.
  enter_run         Destination's enter script, if any; then content for its description.
  termination_run   Adventure's termination script, if the destination is final.
  done              Game and new content committed together.

Each script sees the state left by the one before it, so later writes win
key by key and untouched keys survive. Any failure rolls the whole
transition back. The route-taken text and the destination text must both
exist in the game's language, so every transition adds exactly two content
rows.
"""

from __future__ import annotations

import logging
import time
from uuid import UUID

from wayfarer.errors import NotFoundError, PreconditionError, ResolutionError
from wayfarer.models import Content, Game, TransitionResult, TransitionStage
from wayfarer.scripting import execute_script
from wayfarer.storage import Storage

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def change_location_via_route(
    storage: Storage,
    game_id: int,
    route_id: int,
    timestamp: int | None = None,
) -> TransitionResult:
    """Take `route_id` in `game_id` and return the updated game and its new content."""
    with storage.transaction():
        if timestamp is None:
            timestamp = now_ms()
        return _transition(storage, game_id, route_id, timestamp)


def _transition(
    storage: Storage, game_id: int, route_id: int, timestamp: int
) -> TransitionResult:
    stages: list[TransitionStage] = []
    contents: list[Content] = []

    def _stage(stage: TransitionStage) -> None:
        stages.append(stage)
        logger.debug("game %d route %d: %s", game_id, route_id, stage)

    # 1. Load and check
    game = storage.games.get(game_id)
    if game is None:
        raise NotFoundError(f"Game {game_id} not found")
    route = storage.routes.get(route_id)
    if route is None:
        raise NotFoundError(f"Route {route_id} not found")
    if game.location_id != route.location_id:
        raise PreconditionError(
            f"Game {game_id} is at location {game.location_id}, "
            f"route {route_id} starts at {route.location_id}"
        )
    origin = storage.locations.get(route.location_id)
    destination = storage.locations.get(route.destination_location_id)
    if origin is None or destination is None:
        raise NotFoundError(f"Route {route_id} connects a missing location")
    _stage("at_origin")

    # 2. Exit script
    if origin.exit_script_id is not None:
        execute_script(storage, origin.exit_script_id, game)
        _stage("exit_run")

    # 3. Route-taken script and text
    if route.route_taken_script_id is not None:
        execute_script(storage, route.route_taken_script_id, game)
        _stage("route_run")
    _require_text(storage, game, route.route_taken_source_key, f"route {route.id}")
    contents.append(storage.contents.add_for_game(game, route.route_taken_source_key))

    # 4. Move
    game.location_id = destination.id
    game.location_update_timestamp = timestamp
    _stage("location_updated")

    # 5. Enter script
    if destination.enter_script_id is not None:
        execute_script(storage, destination.enter_script_id, game)
        _stage("enter_run")

    # 6. Destination text
    _require_text(storage, game, destination.source_key, f"location {destination.id}")
    contents.append(storage.contents.add_for_game(game, destination.source_key))

    # 7. Termination
    if destination.final:
        adventure = storage.adventures.get(game.adventure_id)
        if adventure is not None and adventure.termination_script_id is not None:
            execute_script(storage, adventure.termination_script_id, game)
            _stage("termination_run")

    # 8. Persisted when the transaction commits
    _stage("done")
    logger.info(
        "Game %d moved %d -> %d via route %d",
        game.id, origin.id, destination.id, route.id,
    )
    return TransitionResult(game=game, contents=contents, stages=stages)


def _require_text(storage: Storage, game: Game, key: UUID | None, owner: str) -> None:
    if key is None:
        raise ResolutionError(f"No text set for {owner}")
    if storage.sources.get_for_key(key, game.adventure_id, game.language) is None:
        raise ResolutionError(f"Text {key} for {owner} does not exist")
