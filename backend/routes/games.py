"""Game endpoints: start, move along a route, and read content."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from wayfarer import pipeline
from wayfarer.models import ContentFilter
from wayfarer.storage import Storage

from .deps import engine_errors, get_storage
from .models import StartGame, TakeRoute

router = APIRouter()


@router.post("/games")
async def start_game(body: StartGame, storage: Storage = Depends(get_storage)):
    """Start a game at the adventure's initial location."""
    with engine_errors():
        return pipeline.start_game(storage, body.adventure_id, body.timestamp, body.language)


@router.get("/games")
async def list_games(adventure_id: int | None = None, storage: Storage = Depends(get_storage)):
    return storage.games.list(adventure_id=adventure_id)


@router.get("/games/{game_id}")
async def get_game(game_id: int, storage: Storage = Depends(get_storage)):
    game = storage.games.get(game_id)
    if not game:
        raise HTTPException(404, "Game not found")
    return game


@router.delete("/games/{game_id}")
async def delete_game(game_id: int, storage: Storage = Depends(get_storage)):
    """Delete a game and its content."""
    with engine_errors():
        pipeline.remove_game(storage, game_id)
    return {"ok": True}


@router.get("/games/{game_id}/routes")
async def available_routes(game_id: int, storage: Storage = Depends(get_storage)):
    """Routes leaving the game's current location."""
    game = storage.games.get(game_id)
    if not game:
        raise HTTPException(404, "Game not found")
    if game.location_id is None:
        return []
    return storage.routes.list_for_location(game.location_id)


@router.post("/games/{game_id}/route")
async def take_route(game_id: int, body: TakeRoute, storage: Storage = Depends(get_storage)):
    """Move the game along a route and return the new content."""
    with engine_errors():
        return pipeline.change_location_via_route(storage, game_id, body.route_id, body.timestamp)


@router.get("/games/{game_id}/contents")
async def get_contents(
    game_id: int,
    direction: str | None = None,
    start: int | None = None,
    count: int | None = None,
    storage: Storage = Depends(get_storage),
):
    """Page through the game's content log (direction "f" or "b")."""
    if not storage.games.get(game_id):
        raise HTTPException(404, "Game not found")
    with engine_errors():
        return storage.contents.get_partial(
            game_id, ContentFilter(direction=direction, start=start, count=count)
        )


@router.get("/games/{game_id}/contents/latest")
async def get_latest_content(game_id: int, storage: Storage = Depends(get_storage)):
    content = storage.contents.get_latest(game_id)
    if not content:
        raise HTTPException(404, "No content")
    return content


@router.get("/games/{game_id}/text/{key}")
async def content_text(game_id: int, key: UUID, storage: Storage = Depends(get_storage)):
    """Processed text for a content key in the game's language."""
    with engine_errors():
        text = pipeline.get_content_text_for_key(storage, game_id, key)
    if text is None:
        raise HTTPException(404, "Source not found")
    return {"key": key, "text": text}
