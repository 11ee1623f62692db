"""
pulse.engine.models — Trend, prediction and metric records
===========================================================

Every record here is frozen and clamps its numeric scores into the
declared range in ``__post_init__``, so no consumer can observe an
out-of-range value.  ``to_dict()`` produces the JSON shape served to the
dashboard.
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime

from pulse.constants import RATING_SCALE
from pulse.engine.records import clamp, clamp01

__all__ = [
    "CommunityEmpowermentMetrics",
    "CommunityTrend",
    "DemographicInsight",
    "EngagementPattern",
    "FactorType",
    "JsonMixin",
    "TrendDirection",
    "TrendFactor",
    "TrendPeriod",
    "TrendPrediction",
    "Trajectory",
]


class TrendDirection(enum.StrEnum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    VOLATILE = "volatile"


class Trajectory(enum.StrEnum):
    GROWTH = "growth"
    DECLINE = "decline"
    STABILITY = "stability"
    VOLATILITY = "volatility"


class FactorType(enum.StrEnum):
    CONTENT = "content"
    COMMUNITY = "community"
    EXTERNAL = "external"
    PLATFORM = "platform"
    LIBERATION = "liberation"


def _set(obj, name: str, value) -> None:
    object.__setattr__(obj, name, value)


def _jsonable(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class JsonMixin:
    __slots__ = ()

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


# ---------------------------------------------------------------------------
# Per-trend detail records
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class EngagementPattern(JsonMixin):
    """Mean value and direction of one engagement counter in a category."""

    metric_name: str
    value: float
    trend_direction: TrendDirection
    community_impact: float
    liberation_alignment: float

    def __post_init__(self) -> None:
        _set(self, "trend_direction", TrendDirection(self.trend_direction))
        _set(self, "value", max(0.0, float(self.value)))
        _set(self, "community_impact", clamp01(self.community_impact))
        _set(self, "liberation_alignment", clamp01(self.liberation_alignment))


@dataclass(frozen=True, slots=True)
class DemographicInsight(JsonMixin):
    """Anonymized bucket distribution for one demographic dimension.

    ``distribution`` maps bucket label → share; shares sum to ~1.
    """

    dimension: str
    distribution: dict[str, float] = field(hash=False)
    engagement_variation: float = 0.0
    liberation_impact_variation: float = 0.0

    def __post_init__(self) -> None:
        _set(self, "distribution", {k: clamp01(v) for k, v in self.distribution.items()})
        _set(self, "engagement_variation", clamp01(self.engagement_variation))
        _set(self, "liberation_impact_variation", clamp01(self.liberation_impact_variation))


@dataclass(frozen=True, slots=True)
class TrendPeriod(JsonMixin):
    start_date: datetime
    end_date: datetime
    period_type: str


# ---------------------------------------------------------------------------
# CommunityTrend — one per surviving category
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class CommunityTrend(JsonMixin):
    """Per-category summary of momentum, growth, alignment and confidence.

    Created fresh on every run and never mutated afterwards.
    ``community_validated`` / ``validation_votes`` are owned by the external
    validation workflow and always start at ``False`` / ``0``.
    """

    id: str
    category: str
    trend_strength: float
    growth_rate: float
    liberation_impact: float
    community_interest_score: float
    content_volume: int
    unique_contributors: int
    avg_quality_score: float
    avg_community_rating: float
    engagement_patterns: tuple[EngagementPattern, ...]
    demographic_insights: tuple[DemographicInsight, ...]
    trend_period: TrendPeriod
    confidence_level: float
    community_validation_required: bool = True
    community_validated: bool = False
    validation_votes: int = 0

    def __post_init__(self) -> None:
        for name in (
            "trend_strength",
            "liberation_impact",
            "community_interest_score",
            "avg_quality_score",
            "confidence_level",
        ):
            _set(self, name, clamp01(getattr(self, name)))
        _set(self, "growth_rate", clamp(self.growth_rate, -1.0, 1.0))
        _set(self, "avg_community_rating", clamp(self.avg_community_rating, 0.0, RATING_SCALE))
        _set(self, "content_volume", max(0, int(self.content_volume)))
        _set(self, "unique_contributors", max(0, int(self.unique_contributors)))
        _set(self, "engagement_patterns", tuple(self.engagement_patterns))
        _set(self, "demographic_insights", tuple(self.demographic_insights))


# ---------------------------------------------------------------------------
# Predictions
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TrendFactor(JsonMixin):
    factor_name: str
    influence_strength: float
    factor_type: FactorType
    description: str

    def __post_init__(self) -> None:
        _set(self, "factor_type", FactorType(self.factor_type))
        _set(self, "influence_strength", clamp(self.influence_strength, -1.0, 1.0))


@dataclass(frozen=True, slots=True)
class TrendPrediction(JsonMixin):
    """Qualitative trajectory forecast for one trend."""

    trend_id: str
    category: str
    predicted_trajectory: Trajectory
    confidence: float
    factors: tuple[TrendFactor, ...]
    liberation_implications: tuple[str, ...]
    community_empowerment_potential: float
    recommended_actions: tuple[str, ...]

    def __post_init__(self) -> None:
        _set(self, "predicted_trajectory", Trajectory(self.predicted_trajectory))
        _set(self, "confidence", clamp01(self.confidence))
        _set(self, "community_empowerment_potential", clamp01(self.community_empowerment_potential))
        _set(self, "factors", tuple(self.factors))
        _set(self, "liberation_implications", tuple(self.liberation_implications))
        _set(self, "recommended_actions", tuple(self.recommended_actions))


# ---------------------------------------------------------------------------
# Empowerment metrics
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class CommunityEmpowermentMetrics(JsonMixin):
    """Eight weighted-average community-benefit scores (all default 0)."""

    organizing_potential: float = 0.0
    healing_impact: float = 0.0
    joy_celebration: float = 0.0
    economic_justice_focus: float = 0.0
    cultural_authenticity: float = 0.0
    democratic_participation: float = 0.0
    creator_sovereignty: float = 0.0
    anti_oppression_alignment: float = 0.0

    def __post_init__(self) -> None:
        for f in fields(self):
            _set(self, f.name, clamp01(getattr(self, f.name)))

    def items(self) -> list[tuple[str, float]]:
        """``(metric_name, value)`` pairs in declaration order."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]
