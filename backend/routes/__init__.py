"""FastAPI API endpoints under /api.

Endpoint groups: health, adventures (with locations, routes, unreferenced
sources and processed source text), games (start, take a route, content
paging), sources, scripts. Engine errors map to HTTP status codes in
`deps.engine_errors`.
"""

from fastapi import APIRouter

from .adventures import router as adventures_router
from .games import router as games_router
from .health import router as health_router
from .scripts import router as scripts_router
from .sources import router as sources_router

router = APIRouter()
router.include_router(health_router)
router.include_router(adventures_router)
router.include_router(games_router)
router.include_router(sources_router)
router.include_router(scripts_router)
