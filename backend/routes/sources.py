"""Source (narrative text) endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from wayfarer import pipeline
from wayfarer.models import Source
from wayfarer.storage import NIL_KEY, Storage

from .deps import engine_errors, get_storage
from .models import CreateSource, UpdateSource

router = APIRouter()


@router.post("/sources")
async def create_source(body: CreateSource, storage: Storage = Depends(get_storage)):
    """Create a source, optionally fanned out to several languages."""
    source = Source(
        key=body.key or NIL_KEY,
        adventure_id=body.adventure_id,
        name=body.name,
        text=body.text,
        language=body.language or "",
    )
    with engine_errors():
        return pipeline.create_source(storage, source, body.languages)


@router.put("/sources/{key}")
async def update_source(key: UUID, body: UpdateSource, storage: Storage = Depends(get_storage)):
    """Replace the text of one language of a source."""
    source = Source(
        key=key,
        adventure_id=body.adventure_id,
        name=body.name,
        text=body.text,
        language=body.language or "",
    )
    with engine_errors():
        return pipeline.update_source(storage, source)


@router.delete("/sources/{source_id}")
async def delete_source(
    source_id: int, language: str | None = None, storage: Storage = Depends(get_storage)
):
    with engine_errors():
        pipeline.remove_source(storage, source_id, language)
    return {"ok": True}
