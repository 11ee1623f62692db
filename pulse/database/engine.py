"""
pulse.database.engine — Read-only database access
==================================================

Pulse never writes to the content store; it reads one snapshot per
analysis run.  SQLAlchemy with psycopg2 blocks, while the API handlers run
on an ``asyncio`` loop, so every query goes through :func:`run_db`, which
hands the blocking call to a worker thread and awaits the result:

    handler ──await run_db(load_content_records, …)──▶ worker thread
                                                          │ SELECT …
    pipeline ◀────────────── list[ContentRecord] ─────────┘

Usage::

    from pulse.database.engine import create_db_engine, run_db

    engine = create_db_engine()               # DATABASE_URL from the environment
    records = await run_db(load_content_records, engine, start, end)
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# A snapshot read holds one connection for one query; keep the pool small.
POOL_SIZE = 3
POOL_OVERFLOW = 2
POOL_TIMEOUT_SECONDS = 10
POOL_RECYCLE_SECONDS = 1800


def create_db_engine(url: str | None = None) -> Engine:
    """Build the engine for the content store.

    *url* defaults to ``DATABASE_URL``.  Connections are pre-pinged so a
    restarted database does not fail the first request after it.

    Raises
    ------
    RuntimeError
        If neither *url* nor ``DATABASE_URL`` is provided.
    """
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError(
            "No database configured: set DATABASE_URL "
            "(see .env.example) to the community content store."
        )

    engine = create_engine(
        url,
        pool_size=POOL_SIZE,
        max_overflow=POOL_OVERFLOW,
        pool_timeout=POOL_TIMEOUT_SECONDS,
        pool_recycle=POOL_RECYCLE_SECONDS,
        pool_pre_ping=True,
    )
    logger.info("Content store engine ready (host=%s)", engine.url.host)
    return engine


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """Session for a single read; nothing is ever committed."""
    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()


async def run_db(func: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> R:
    """Await a blocking database call without stalling the event loop."""
    return await asyncio.to_thread(func, *args, **kwargs)
