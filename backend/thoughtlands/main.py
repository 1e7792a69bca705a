"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from thoughtlands.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.thoughtlands_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Thoughtlands",
        description="Spatial layouts for notes: similarity to a concept becomes position on a canvas",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all mode modules to trigger registration
    from thoughtlands.engine.registry import load_modes

    registry = load_modes()
    logging.getLogger(__name__).info("Registered %d layout modes", registry.count)

    from thoughtlands.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
