import logging
from pathlib import Path

from fastapi import FastAPI

from backend.routes import router
from wayfarer.config import load_settings
from wayfarer.storage import Storage


def create_app(data_dir: Path | None = None) -> FastAPI:
    settings = load_settings(data_dir=data_dir)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Wayfarer")
    app.state.storage = Storage(settings.data_dir, settings)
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
