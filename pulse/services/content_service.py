"""
pulse.services.content_service — Content snapshot supplier
===========================================================

Reads the rows created inside a timeframe and normalizes them into
:class:`ContentRecord` objects.  Synchronous by design; async callers go
through :func:`database_fetcher`, which wraps it in ``run_db``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from sqlalchemy import Engine, select

from pulse.database.engine import get_session, run_db
from pulse.database.models import CommunityContent
from pulse.engine.records import ContentRecord, Timeframe

logger = logging.getLogger(__name__)

ContentFetcher = Callable[[Timeframe], Awaitable[list[ContentRecord]]]


def load_content_records(engine: Engine, start: datetime, end: datetime) -> list[ContentRecord]:
    """All content created in ``[start, end]``, oldest first."""
    with get_session(engine) as session:
        rows = session.scalars(
            select(CommunityContent)
            .where(CommunityContent.created_at >= start, CommunityContent.created_at <= end)
            .order_by(CommunityContent.created_at, CommunityContent.id)
        ).all()
        records = [ContentRecord.from_mapping(row.to_mapping()) for row in rows]

    logger.debug("Loaded %d content records (%s → %s)", len(records), start, end)
    return records


def database_fetcher(engine: Engine) -> ContentFetcher:
    """Async supplier bound to *engine*, suitable for ``generate_insights``."""

    async def fetch(timeframe: Timeframe) -> list[ContentRecord]:
        return await run_db(load_content_records, engine, timeframe.start, timeframe.end)

    return fetch
