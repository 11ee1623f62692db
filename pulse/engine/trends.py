"""
pulse.engine.trends — Per-category trend calculation
=====================================================

Pure calculation: one category's records in, one :class:`CommunityTrend`
out.  No database I/O, no clock reads — the trend id is derived from the
inputs so identical snapshots always produce identical trends.

Stages for a category (records sorted ascending by ``created_at``):

  strength → growth → liberation impact → interest → quality / rating
  → engagement patterns → demographics → contributors → confidence
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from pulse.config import AnalysisConfig
from pulse.constants import (
    CONFIDENCE_SAMPLE_SIZE,
    DEFAULT_ENGAGEMENT_IMPACT_WEIGHT,
    ENGAGEMENT_IMPACT_WEIGHTS,
    ENGAGEMENT_METRICS,
    ENGAGEMENT_VALUE_NORMALIZER,
    RATING_SCALE,
    STABLE_CHANGE_RATIO,
    TREND_REFERENCE_WINDOW_DAYS,
    TREND_STRENGTH_MIN_RECORDS,
    VOTE_NORMALIZER,
)
from pulse.engine.demographics import DemographicAggregator, analyze_demographics
from pulse.engine.models import CommunityTrend, EngagementPattern, TrendDirection, TrendPeriod
from pulse.engine.records import (
    ContentRecord,
    Timeframe,
    clamp,
    clamp01,
    mean,
    resolve_community_rating,
    resolve_liberation_impact,
    resolve_quality_score,
)

__all__ = [
    "analyze_engagement_patterns",
    "assess_community_impact",
    "assess_metric_alignment",
    "calculate_category_trend",
    "calculate_community_interest",
    "calculate_confidence",
    "calculate_growth_rate",
    "calculate_metric_direction",
    "calculate_trend_strength",
    "count_unique_contributors",
    "record_interest",
    "trend_id",
]

_TREND_NAMESPACE = uuid.UUID("6f1c2a8e-5b0d-4e4e-9a57-3c1d2b7f9e10")


# ---------------------------------------------------------------------------
# Momentum and growth
# ---------------------------------------------------------------------------
def calculate_trend_strength(records: Sequence[ContentRecord]) -> float:
    """Momentum of the second half of the records vs the first half.

    Each half's count is turned into a per-day rate over half of the
    30-day reference window.  Fewer than three records ⇒ 0.
    """
    if len(records) < TREND_STRENGTH_MIN_RECORDS:
        return 0.0

    half_window = TREND_REFERENCE_WINDOW_DAYS / 2
    midpoint = len(records) // 2
    first_rate = midpoint / half_window
    second_rate = (len(records) - midpoint) / half_window

    if first_rate == 0:
        return 1.0 if second_rate > 0 else 0.0
    return clamp01(((second_rate - first_rate) / first_rate + 1) / 2)


def calculate_growth_rate(records: Sequence[ContentRecord], timeframe: Timeframe) -> float:
    """Relative change in volume across the temporal midpoint of *timeframe*.

    A timeframe spanning one day or less (including zero or negative
    spans) short-circuits to 0.
    """
    if timeframe.span_days <= 1:
        return 0.0

    midpoint = timeframe.midpoint
    before = sum(1 for r in records if r.created_at < midpoint)
    after = sum(1 for r in records if r.created_at >= midpoint)

    if before == 0:
        return 1.0 if after > 0 else 0.0
    return clamp((after - before) / before, -1.0, 1.0)


# ---------------------------------------------------------------------------
# Interest
# ---------------------------------------------------------------------------
def record_interest(record: ContentRecord) -> float:
    """Average of normalized votes, rating and engagement for one record.

    Absent ratings count as 0 here (unlike the category rating average).
    """
    vote_score = min(1.0, record.total_votes / VOTE_NORMALIZER)
    rating_score = (record.community_rating or 0.0) / RATING_SCALE
    return (vote_score + rating_score + record.engagement_score) / 3


def calculate_community_interest(records: Sequence[ContentRecord]) -> float:
    value = mean(record_interest(r) for r in records)
    return 0.0 if value is None else value


# ---------------------------------------------------------------------------
# Engagement patterns
# ---------------------------------------------------------------------------
def calculate_metric_direction(values: Sequence[float]) -> TrendDirection:
    """Classify a time-ordered series by comparing its halves.

    A change under 10% is stable; a change of exactly 10% already counts
    as a move.  Beyond that the direction is only
    reported when at least half of the consecutive steps agree with it;
    otherwise the series is volatile.
    """
    if len(values) < 2:
        return TrendDirection.STABLE

    midpoint = len(values) // 2
    first_avg = mean(values[:midpoint])
    second_avg = mean(values[midpoint:])
    change_ratio = (second_avg - first_avg) / max(first_avg, 1)

    if abs(change_ratio) < STABLE_CHANGE_RATIO:
        return TrendDirection.STABLE

    sign = 1 if change_ratio > 0 else -1
    steps = [b - a for a, b in zip(values, values[1:])]
    agreeing = sum(1 for step in steps if step * sign > 0)
    if agreeing * 2 < len(steps):
        return TrendDirection.VOLATILE
    return TrendDirection.INCREASING if sign > 0 else TrendDirection.DECREASING


def assess_community_impact(metric: str, value: float) -> float:
    base = ENGAGEMENT_IMPACT_WEIGHTS.get(metric, DEFAULT_ENGAGEMENT_IMPACT_WEIGHT)
    return (base + min(1.0, value / ENGAGEMENT_VALUE_NORMALIZER)) / 2


def assess_metric_alignment(records: Sequence[ContentRecord]) -> float:
    """Sum of present alignment scores over the *full* record count."""
    total = sum(
        r.liberation_alignment_score for r in records
        if r.liberation_alignment_score is not None
    )
    return total / max(len(records), 1)


def analyze_engagement_patterns(records: Sequence[ContentRecord]) -> list[EngagementPattern]:
    """One pattern per engagement counter carried by at least two records."""
    alignment = assess_metric_alignment(records)
    patterns: list[EngagementPattern] = []
    for metric in ENGAGEMENT_METRICS:
        values = [v for v in (r.metric(metric) for r in records) if v is not None]
        if len(values) < 2:
            continue
        avg_value = mean(values)
        patterns.append(
            EngagementPattern(
                metric_name=metric,
                value=avg_value,
                trend_direction=calculate_metric_direction(values),
                community_impact=assess_community_impact(metric, avg_value),
                liberation_alignment=alignment,
            )
        )
    return patterns


# ---------------------------------------------------------------------------
# Contributors & confidence
# ---------------------------------------------------------------------------
def count_unique_contributors(records: Sequence[ContentRecord]) -> int:
    return len({r.contributor_id for r in records if r.contributor_id})


def calculate_confidence(trend_strength: float, sample_size: int) -> float:
    """Mean of momentum and sample size (saturating at 50 records)."""
    size_factor = min(1.0, sample_size / CONFIDENCE_SAMPLE_SIZE)
    return (trend_strength + size_factor) / 2


def trend_id(category: str, timeframe: Timeframe, period: str) -> str:
    """Stable per-run identifier: same inputs ⇒ same id."""
    key = f"{category}|{timeframe.start.isoformat()}|{timeframe.end.isoformat()}|{period}"
    return f"trend_{uuid.uuid5(_TREND_NAMESPACE, key).hex}"


# ---------------------------------------------------------------------------
# Full category calculation
# ---------------------------------------------------------------------------
def calculate_category_trend(
    category: str,
    records: Sequence[ContentRecord],
    timeframe: Timeframe,
    config: AnalysisConfig,
    *,
    demographics: DemographicAggregator | None = None,
) -> CommunityTrend:
    """Build the :class:`CommunityTrend` for one category.

    This is a PURE function.  *records* are not modified; a sorted copy is
    used.  Demographic insights are omitted entirely when the privacy
    level is ``public``.
    """
    ordered = sorted(records, key=lambda r: r.created_at)

    strength = calculate_trend_strength(ordered)
    insights = (
        [] if config.suppress_demographics
        else analyze_demographics(ordered, demographics)
    )

    return CommunityTrend(
        id=trend_id(category, timeframe, config.analysis_period.value),
        category=category,
        trend_strength=strength,
        growth_rate=calculate_growth_rate(ordered, timeframe),
        liberation_impact=resolve_liberation_impact(ordered),
        community_interest_score=calculate_community_interest(ordered),
        content_volume=len(ordered),
        unique_contributors=count_unique_contributors(ordered),
        avg_quality_score=resolve_quality_score(ordered),
        avg_community_rating=resolve_community_rating(ordered),
        engagement_patterns=analyze_engagement_patterns(ordered),
        demographic_insights=insights,
        trend_period=TrendPeriod(
            start_date=timeframe.start,
            end_date=timeframe.end,
            period_type=config.analysis_period.value,
        ),
        confidence_level=calculate_confidence(strength, len(ordered)),
        community_validation_required=config.community_validation_required,
    )
