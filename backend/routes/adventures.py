"""Adventure CRUD, locations, routes and source text endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from wayfarer import pipeline
from wayfarer.models import Location, Route
from wayfarer.storage import Storage

from .deps import engine_errors, get_storage
from .models import CreateAdventure, CreateLocation, CreateRoute

router = APIRouter()


@router.get("/adventures")
async def list_adventures(name: str | None = None, storage: Storage = Depends(get_storage)):
    """List adventures, optionally filtered by a name substring."""
    return storage.adventures.list(name)


@router.post("/adventures")
async def create_adventure(body: CreateAdventure, storage: Storage = Depends(get_storage)):
    """Create an adventure with its description in every configured language."""
    with engine_errors():
        return pipeline.create_adventure(storage, body.name, body.description, body.language)


@router.get("/adventures/{adventure_id}")
async def get_adventure(adventure_id: int, storage: Storage = Depends(get_storage)):
    adventure = storage.adventures.get(adventure_id)
    if not adventure:
        raise HTTPException(404, "Adventure not found")
    return adventure


@router.delete("/adventures/{adventure_id}")
async def delete_adventure(adventure_id: int, storage: Storage = Depends(get_storage)):
    """Delete an adventure and everything it owns."""
    with engine_errors():
        pipeline.remove_adventure(storage, adventure_id)
    return {"ok": True}


@router.get("/adventures/{adventure_id}/locations")
async def list_locations(adventure_id: int, storage: Storage = Depends(get_storage)):
    return storage.locations.list_for_adventure(adventure_id)


@router.post("/adventures/{adventure_id}/locations")
async def create_location(
    adventure_id: int, body: CreateLocation, storage: Storage = Depends(get_storage)
):
    if not storage.adventures.get(adventure_id):
        raise HTTPException(404, "Adventure not found")
    with storage.transaction():
        return storage.locations.add(Location(adventure_id=adventure_id, **body.model_dump()))


@router.get("/adventures/{adventure_id}/routes")
async def list_routes(
    adventure_id: int, location_id: int | None = None, storage: Storage = Depends(get_storage)
):
    return storage.routes.list(location_id=location_id, adventure_id=adventure_id)


@router.post("/adventures/{adventure_id}/routes")
async def create_route(
    adventure_id: int, body: CreateRoute, storage: Storage = Depends(get_storage)
):
    """Connect two locations of the adventure."""
    for location_id in (body.location_id, body.destination_location_id):
        location = storage.locations.get(location_id)
        if not location or location.adventure_id != adventure_id:
            raise HTTPException(400, f"Location {location_id} is not part of adventure {adventure_id}")
    with storage.transaction():
        return storage.routes.add(Route(**body.model_dump()))


@router.get("/adventures/{adventure_id}/unreferenced-sources")
async def unreferenced_sources(adventure_id: int, storage: Storage = Depends(get_storage)):
    """Sources nothing in the adventure refers to."""
    with engine_errors():
        return pipeline.find_unreferenced_sources(storage, adventure_id)


@router.get("/adventures/{adventure_id}/sources/{key}")
async def source_for_key(
    adventure_id: int,
    key: UUID,
    language: str | None = None,
    processed: bool = False,
    game_id: int | None = None,
    storage: Storage = Depends(get_storage),
):
    """Source text for a key; `processed` resolves scripts and objects against `game_id`."""
    game = storage.games.get(game_id) if game_id is not None else None
    if game_id is not None and not game:
        raise HTTPException(404, "Game not found")
    with engine_errors(), storage.transaction():
        source = pipeline.get_source_for_key(
            storage, key, adventure_id, language, processed=processed, game=game
        )
    if not source:
        raise HTTPException(404, "Source not found")
    return source
