from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import Config
from .core.artifacts import ArtifactStore
from .core.coordinator import PresentationCoordinator
from .core.passphrase import PassphraseManager
from .models import HealthResponse
from .routes.realtime import router as realtime_router
from .routes.upload import router as upload_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or Config.load()
    app = FastAPI(title="Sync PDF Viewer", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Attach shared state
    app.state.config = config
    app.state.coordinator = PresentationCoordinator(
        PassphraseManager(config.passphrase_bytes, initial=config.initial_passphrase)
    )
    app.state.artifacts = ArtifactStore(config.upload_dir, max_bytes=config.max_upload_bytes)

    # Routers
    app.include_router(realtime_router)
    app.include_router(upload_router)
    app.mount("/uploads", StaticFiles(directory=str(config.upload_dir)), name="uploads")

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(**app.state.coordinator.status())

    @app.on_event("startup")
    async def startup():
        # Operator bootstrap banner
        logger.info("Sync PDF Viewer listening on port %d", config.port)
        logger.info("Presenter passphrase: %s", app.state.coordinator.passphrases.current)

    return app
