"""
pulse.services.insights_service — One analysis run, end to end
===============================================================

The only suspension point in a run is the snapshot fetch.  It is awaited
under a caller-supplied deadline; once the snapshot is in hand the pure
engine pipeline runs to completion without further awaits.

Any supplier failure (exception or missed deadline) is surfaced as
:class:`InputFetchError` and no partial report is built.
"""

from __future__ import annotations

import asyncio
import logging

from pulse.config import AnalysisConfig
from pulse.engine.demographics import DemographicAggregator
from pulse.engine.emerging import EmergenceWindow, TopicSignals
from pulse.engine.pipeline import InsightsBundle, run_pipeline
from pulse.engine.records import ContentRecord, Timeframe
from pulse.errors import InputFetchError
from pulse.services.content_service import ContentFetcher

logger = logging.getLogger(__name__)


async def fetch_snapshot(
    fetch: ContentFetcher, timeframe: Timeframe, *, timeout: float | None = None
) -> list[ContentRecord]:
    """Await *fetch* under *timeout* seconds (``None`` = no deadline).

    Raises
    ------
    InputFetchError
        If the supplier raises or does not finish in time.
    """
    logger.info("Fetching content snapshot %s → %s", timeframe.start, timeframe.end)
    try:
        records = await asyncio.wait_for(fetch(timeframe), timeout=timeout)
    except TimeoutError as exc:
        logger.warning("Content fetch timed out after %ss", timeout)
        raise InputFetchError(f"content fetch timed out after {timeout}s") from exc
    except Exception as exc:
        logger.warning("Content fetch failed: %s", exc)
        raise InputFetchError(f"content fetch failed: {exc}") from exc

    snapshot = list(records)
    logger.info("Fetched %d content records", len(snapshot))
    return snapshot


async def generate_insights(
    fetch: ContentFetcher,
    timeframe: Timeframe,
    config: AnalysisConfig,
    *,
    timeout: float | None = None,
    emergence_window: EmergenceWindow | None = None,
    emergence_window_days: int = 7,
    topic_signals: TopicSignals | None = None,
    demographics: DemographicAggregator | None = None,
) -> InsightsBundle:
    """Fetch the snapshot for *timeframe*, then run the full pipeline."""
    snapshot = await fetch_snapshot(fetch, timeframe, timeout=timeout)
    return run_pipeline(
        snapshot,
        timeframe,
        config,
        emergence_window=emergence_window,
        emergence_window_days=emergence_window_days,
        topic_signals=topic_signals,
        demographics=demographics,
    )
