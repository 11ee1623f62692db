"""
pulse.api.main — Community insights HTTP service
=================================================

Serves the dashboard's read-only insights endpoint::

    uvicorn pulse.api.main:app --port 8000

Environment (``.env`` is loaded before anything else is imported):
``DATABASE_URL``, ``PULSE_CONFIG``, and either ``CORS_ALLOW_ORIGINS``
(comma-separated) or ``FRONTEND_URL`` for the dashboard origin.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from pulse import __version__  # noqa: E402
from pulse.api.deps import get_config  # noqa: E402
from pulse.api.routes.insights import router as insights_router  # noqa: E402

logger = logging.getLogger(__name__)


def dashboard_origins() -> list[str]:
    """Origins allowed to read insights; explicit list wins over FRONTEND_URL."""
    configured = os.getenv("CORS_ALLOW_ORIGINS") or os.getenv("FRONTEND_URL") or ""
    return [o.strip().rstrip("/") for o in configured.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Invalid analysis options should stop the server here, not on the first request.
    resolve_config = app.dependency_overrides.get(get_config, get_config)
    cfg = resolve_config()
    logger.info(
        "Serving insights for %s (period=%s, privacy=%s, min_data_points=%d)",
        cfg.community_name,
        cfg.analysis.analysis_period,
        cfg.analysis.privacy_level,
        cfg.analysis.min_data_points,
    )
    yield
    logger.info("Insights service stopped")


app = FastAPI(
    title="Pulse Community Insights API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=dashboard_origins(),
    allow_methods=["GET"],
    allow_headers=["Accept", "Content-Type"],
)

app.include_router(insights_router, prefix="/api")


@app.get("/api/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok"}
