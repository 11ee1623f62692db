"""
pulse.engine.records — ContentRecord, Timeframe and default resolution
=======================================================================

The engine's only input.  Every content item supplied by the store is
normalized into a frozen :class:`ContentRecord` before any calculation.
Numeric fields that are absent stay ``None`` here; they are resolved to
their documented defaults by the named ``resolve_*`` functions below, at
the point of aggregation.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from pulse.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_COMMUNITY_RATING,
    DEFAULT_LIBERATION_IMPACT,
    DEFAULT_QUALITY_SCORE,
    ENGAGEMENT_METRICS,
    RATING_SCALE,
)

__all__ = [
    "ContentRecord",
    "Timeframe",
    "clamp",
    "clamp01",
    "mean",
    "parse_timestamp",
    "resolve_community_rating",
    "resolve_liberation_impact",
    "resolve_quality_score",
]


# ---------------------------------------------------------------------------
# Small numeric helpers
# ---------------------------------------------------------------------------
def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def mean(values: Iterable[float]) -> float | None:
    """Arithmetic mean, or ``None`` for an empty iterable."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def _finite(value) -> float | None:
    """``float(value)``, or ``None`` for absent, NaN or infinite values."""
    if value is None:
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def _optional_score(value, high: float) -> float | None:
    number = _finite(value)
    if number is None:
        return None
    return clamp(number, 0.0, high)


def _optional_count(value) -> float | None:
    number = _finite(value)
    if number is None:
        return None
    return max(0.0, number)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO-8601 string (or pass a datetime through) as aware UTC.

    Naive values are assumed to already be UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"created_at must be an ISO-8601 string or datetime, got {value!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _first_present(raw: Mapping, *keys: str):
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


# ---------------------------------------------------------------------------
# ContentRecord — read-only engine input
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ContentRecord:
    """One content item (article, post, event) as seen by the engine.

    ``demographics`` holds *pre-bucketed* labels only (e.g.
    ``{"age_range": "25-34"}``) — never individual identifiers.
    """

    id: str
    category: str
    created_at: datetime
    liberation_alignment_score: float | None = None
    quality_score: float | None = None
    community_rating: float | None = None
    total_votes: int = 0
    engagement_score: float = 0.0
    contributor_id: str | None = None
    views: float | None = None
    shares: float | None = None
    discussions: float | None = None
    ratings: float | None = None
    tags: tuple[str, ...] = ()
    demographics: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", (self.category or "").strip() or DEFAULT_CATEGORY)
        object.__setattr__(self, "created_at", parse_timestamp(self.created_at))
        object.__setattr__(
            self, "liberation_alignment_score",
            _optional_score(self.liberation_alignment_score, 1.0),
        )
        object.__setattr__(self, "quality_score", _optional_score(self.quality_score, 1.0))
        object.__setattr__(self, "community_rating", _optional_score(self.community_rating, RATING_SCALE))
        object.__setattr__(self, "total_votes", int(_optional_count(self.total_votes) or 0))
        object.__setattr__(self, "engagement_score", clamp01(_finite(self.engagement_score) or 0.0))
        for metric in ENGAGEMENT_METRICS:
            object.__setattr__(self, metric, _optional_count(getattr(self, metric)))
        object.__setattr__(self, "tags", tuple(str(t) for t in self.tags or ()))
        object.__setattr__(self, "demographics", dict(self.demographics or {}))

    def metric(self, name: str) -> float | None:
        """Return the raw engagement counter *name* (``None`` if absent)."""
        if name not in ENGAGEMENT_METRICS:
            raise KeyError(name)
        return getattr(self, name)

    @classmethod
    def from_mapping(cls, raw: Mapping) -> ContentRecord:
        """Build a record from a supplier row (dict-like).

        Category falls back ``primary_category`` → ``category`` →
        ``"General"``; the contributor is the first present of ``author``,
        ``curator_id``, ``submitted_by``.

        Raises
        ------
        ValueError
            If ``created_at`` is missing or not ISO-8601.
        """
        if raw.get("created_at") is None:
            raise ValueError(f"content record {raw.get('id')!r} has no created_at")
        contributor = _first_present(raw, "author", "curator_id", "submitted_by")
        return cls(
            id=str(raw.get("id", "")),
            category=_first_present(raw, "primary_category", "category") or DEFAULT_CATEGORY,
            created_at=raw["created_at"],
            liberation_alignment_score=raw.get("liberation_alignment_score"),
            quality_score=raw.get("quality_score"),
            community_rating=raw.get("community_rating"),
            total_votes=raw.get("total_votes") or 0,
            engagement_score=raw.get("engagement_score") or 0.0,
            contributor_id=str(contributor) if contributor is not None else None,
            views=raw.get("views"),
            shares=raw.get("shares"),
            discussions=raw.get("discussions"),
            ratings=raw.get("ratings"),
            tags=tuple(raw.get("tags") or ()),
            demographics=raw.get("demographics") or {},
        )


# ---------------------------------------------------------------------------
# Timeframe
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Timeframe:
    """The (start, end) range bounding an analysis run."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", parse_timestamp(self.start))
        object.__setattr__(self, "end", parse_timestamp(self.end))

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    @property
    def span_days(self) -> float:
        return self.span.total_seconds() / 86400

    @property
    def midpoint(self) -> datetime:
        return self.start + self.span / 2

    @classmethod
    def trailing(cls, days: int, *, now: datetime | None = None) -> Timeframe:
        """The *days*-long window ending at *now* (default: current UTC time)."""
        end = now or datetime.now(UTC)
        return cls(start=end - timedelta(days=days), end=end)


# ---------------------------------------------------------------------------
# Named default resolution — one function per field
# ---------------------------------------------------------------------------
def resolve_liberation_impact(records: list[ContentRecord]) -> float:
    """Mean present alignment; 0.5 if none present; 0 for no records."""
    if not records:
        return 0.0
    value = mean(
        r.liberation_alignment_score for r in records
        if r.liberation_alignment_score is not None
    )
    return DEFAULT_LIBERATION_IMPACT if value is None else value


def resolve_quality_score(records: list[ContentRecord]) -> float:
    """Mean present quality; 0.7 if none present; 0 for no records."""
    if not records:
        return 0.0
    value = mean(r.quality_score for r in records if r.quality_score is not None)
    return DEFAULT_QUALITY_SCORE if value is None else value


def resolve_community_rating(records: list[ContentRecord]) -> float:
    """Mean present rating; 3.5 if none present; 0 for no records."""
    if not records:
        return 0.0
    value = mean(r.community_rating for r in records if r.community_rating is not None)
    return DEFAULT_COMMUNITY_RATING if value is None else value
