# -*- coding: utf-8 -*-
"""
NutriTrack API

Body measurement analysis service: body-shape and somatotype classification
with coaching tips, plus per-subject measurement history.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .anthropometry.api import router as anthropometry_router
from .config import settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title="NutriTrack",
    description="Body-shape and somatotype classification from body measurements",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(anthropometry_router)


@app.get("/api/health")
def health() -> dict:
    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "data_root": str(settings.data_root),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        port = int(settings.port_raw)
    except ValueError:
        logger.warning("Invalid port %r, falling back to 8000", settings.port_raw)
        port = 8000

    uvicorn.run("nutritrack.api:app", host=settings.host, port=port, reload=False)
