"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import Engine, create_engine

# ---------------------------------------------------------------------------
# Make JSONB columns work in SQLite for testing.
# SQLite doesn't support JSONB natively, but SQLAlchemy's JSON type works.
# We register a custom type compiler so SQLite renders JSONB as TEXT.
# ---------------------------------------------------------------------------
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.orm import Session

from pulse.database.models import Base
from pulse.engine.models import CommunityTrend, TrendPeriod
from pulse.engine.records import ContentRecord, Timeframe

_jsonb_sqlite_registered = False


def _register_jsonb_sqlite_compat():
    """Register SQLite compilation for PG JSONB type (idempotent)."""
    global _jsonb_sqlite_registered
    if _jsonb_sqlite_registered:
        return
    from sqlalchemy.ext.compiler import compiles

    @compiles(PG_JSONB, "sqlite")
    def _compile_jsonb_as_text(type_, compiler, **kw):
        return "TEXT"

    _jsonb_sqlite_registered = True


_register_jsonb_sqlite_compat()

# A fixed "now" so every test is deterministic.
NOW = datetime(2025, 6, 30, 12, 0, tzinfo=UTC)


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with the content table.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used in ``run_db``).
    """
    from sqlalchemy.pool import StaticPool

    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a session that rolls back after each test."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


def make_record(
    category: str = "housing-justice",
    *,
    days_ago: float = 1.0,
    now: datetime = NOW,
    record_id: str | None = None,
    **overrides,
) -> ContentRecord:
    """Build a ContentRecord *days_ago* before *now*.  Usable as a factory."""
    make_record.counter += 1
    fields = {
        "id": record_id or f"rec-{make_record.counter}",
        "category": category,
        "created_at": now - timedelta(days=days_ago),
        "liberation_alignment_score": 0.8,
    }
    fields.update(overrides)
    return ContentRecord(**fields)


make_record.counter = 0


@pytest.fixture
def month() -> Timeframe:
    """The 30 days ending at NOW."""
    return Timeframe(start=NOW - timedelta(days=30), end=NOW)


def make_trend(
    category: str = "housing-justice",
    *,
    liberation_impact: float = 0.8,
    community_interest_score: float = 0.6,
    confidence_level: float = 0.8,
    growth_rate: float = 0.0,
    avg_quality_score: float = 0.7,
    trend_strength: float = 0.5,
    demographic_insights=(),
) -> CommunityTrend:
    """Build a CommunityTrend directly, bypassing the calculator."""
    return CommunityTrend(
        id=f"trend_{category}",
        category=category,
        trend_strength=trend_strength,
        growth_rate=growth_rate,
        liberation_impact=liberation_impact,
        community_interest_score=community_interest_score,
        content_volume=10,
        unique_contributors=5,
        avg_quality_score=avg_quality_score,
        avg_community_rating=3.5,
        engagement_patterns=(),
        demographic_insights=demographic_insights,
        trend_period=TrendPeriod(
            start_date=NOW - timedelta(days=30), end_date=NOW, period_type="weekly"
        ),
        confidence_level=confidence_level,
    )
