"""Yanggaeng Health Age API — FastAPI application entry point.

Run locally:
    uvicorn src.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import get_settings
from src.health_age.config_loader import get_health_age_policy, reload_health_age_policy
from src.routers import health, health_age

# ---------- Logging ----------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("yanggaeng")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logging.getLogger("yanggaeng").setLevel(settings.log_level.upper())
    logger.info(
        "Starting Yanggaeng Health Age API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    # Fail fast on a broken policy rather than on the first request
    if settings.health_age_policy_path:
        reload_health_age_policy(Path(settings.health_age_policy_path))
    else:
        get_health_age_policy()
    yield
    logger.info("Yanggaeng Health Age API shut down")


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Yanggaeng Health Age API",
        description=(
            "Deterministic health-age computation from body-composition "
            "measurements, with evidence for narrative generation."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside v1 prefix — always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(health_age.router, prefix=v1_prefix)

    return app


app = create_app()
