"""
pulse.api.routes.insights — Community insights endpoint
========================================================
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import Engine

from pulse.api.deps import get_config, get_engine
from pulse.config import PulseConfig
from pulse.engine.records import Timeframe
from pulse.errors import InputFetchError
from pulse.services.content_service import database_fetcher
from pulse.services.insights_service import generate_insights

logger = logging.getLogger(__name__)

router = APIRouter(tags=["insights"])

TIMEFRAME_DAYS: dict[str, int] = {"week": 7, "month": 30, "quarter": 90}


# ---------------------------------------------------------------------------
# GET /insights
# ---------------------------------------------------------------------------
@router.get("/insights")
async def get_insights(
    timeframe: Annotated[str, Query(pattern="^(week|month|quarter)$")] = "month",
    engine: Engine = Depends(get_engine),
    cfg: PulseConfig = Depends(get_config),
):
    """Trends, predictions, empowerment metrics and report for the dashboard."""
    window = Timeframe.trailing(TIMEFRAME_DAYS[timeframe])
    try:
        bundle = await generate_insights(
            database_fetcher(engine),
            window,
            cfg.analysis,
            timeout=cfg.fetch_timeout_seconds,
            emergence_window_days=cfg.emergence_window_days,
        )
    except InputFetchError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc)) from exc

    payload = bundle.to_dict()
    payload["community_name"] = cfg.community_name
    return payload
