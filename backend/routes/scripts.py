"""Script endpoints: save with includes, delete, and run against a game."""

from fastapi import APIRouter, Depends, HTTPException

from wayfarer import pipeline
from wayfarer.models import Script
from wayfarer.scripting import collect_include_closure, execute_script
from wayfarer.storage import Storage

from .deps import engine_errors, get_storage
from .models import SaveScript

router = APIRouter()


@router.get("/adventures/{adventure_id}/scripts")
async def list_scripts(adventure_id: int, storage: Storage = Depends(get_storage)):
    return storage.scripts.list_for_adventure(adventure_id)


@router.post("/scripts")
async def create_script(body: SaveScript, storage: Storage = Depends(get_storage)):
    script = Script(adventure_id=body.adventure_id, name=body.name, content=body.content)
    with engine_errors():
        return pipeline.update_script(storage, script, body.includes)


@router.put("/scripts/{script_id}")
async def update_script(script_id: int, body: SaveScript, storage: Storage = Depends(get_storage)):
    """Replace a script's code; `includes` (when given) replaces its include list in order."""
    script = Script(
        id=script_id, adventure_id=body.adventure_id, name=body.name, content=body.content
    )
    with engine_errors():
        return pipeline.update_script(storage, script, body.includes)


@router.delete("/scripts/{script_id}")
async def delete_script(script_id: int, storage: Storage = Depends(get_storage)):
    """Delete a script and clear every reference to it."""
    with engine_errors():
        pipeline.remove_script(storage, script_id)
    return {"ok": True}


@router.get("/scripts/{script_id}/includes")
async def script_includes(script_id: int, storage: Storage = Depends(get_storage)):
    """Every script loaded before this one, in load order."""
    with engine_errors():
        return collect_include_closure(storage, script_id)


@router.post("/scripts/{script_id}/execute/{game_id}")
async def run_script(script_id: int, game_id: int, storage: Storage = Depends(get_storage)):
    """Run a script against a game and keep its state changes."""
    game = storage.games.get(game_id)
    if not game:
        raise HTTPException(404, "Game not found")
    with engine_errors(), storage.transaction():
        result = execute_script(storage, script_id, game)
    return {"result": result, "game": game}
