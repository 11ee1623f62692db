"""
pulse.engine.prediction — Trajectory predictor
===============================================

Derives influence factors from a trend's own scores and maps them to a
qualitative trajectory plus templated implications and actions.  The
thresholds are heuristics, not a fitted model.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pulse.engine.models import (
    CommunityTrend,
    FactorType,
    Trajectory,
    TrendFactor,
    TrendPrediction,
)

__all__ = [
    "calculate_empowerment_potential",
    "generate_action_recommendations",
    "assess_liberation_implications",
    "identify_trend_factors",
    "predict_trajectories",
    "predict_trajectory",
    "predict_trend",
]

_GROWTH_FACTOR_FLOOR = 0.7
_DECLINE_FACTOR_CEILING = 0.4
_GROWTH_RATE_THRESHOLD = 0.1
_VOLATILITY_CONFIDENCE = 0.5
_STRONG_IMPACT = 0.8
_AMPLIFY_IMPACT = 0.7
_LOW_QUALITY = 0.6


def identify_trend_factors(trend: CommunityTrend) -> list[TrendFactor]:
    return [
        TrendFactor(
            factor_name="Community Interest",
            influence_strength=trend.community_interest_score,
            factor_type=FactorType.COMMUNITY,
            description="Level of community engagement and interest",
        ),
        TrendFactor(
            factor_name="Liberation Alignment",
            influence_strength=trend.liberation_impact,
            factor_type=FactorType.LIBERATION,
            description="Alignment with liberation values and principles",
        ),
        TrendFactor(
            factor_name="Content Quality",
            influence_strength=trend.avg_quality_score,
            factor_type=FactorType.CONTENT,
            description="Overall quality and value of content in category",
        ),
    ]


def predict_trajectory(trend: CommunityTrend, factors: Sequence[TrendFactor]) -> Trajectory:
    """First matching rule wins: growth, decline, volatility, stability."""
    avg_strength = (
        sum(f.influence_strength for f in factors) / len(factors) if factors else 0.0
    )
    if avg_strength > _GROWTH_FACTOR_FLOOR and trend.growth_rate > _GROWTH_RATE_THRESHOLD:
        return Trajectory.GROWTH
    if avg_strength < _DECLINE_FACTOR_CEILING or trend.growth_rate < -_GROWTH_RATE_THRESHOLD:
        return Trajectory.DECLINE
    if trend.confidence_level < _VOLATILITY_CONFIDENCE:
        return Trajectory.VOLATILITY
    return Trajectory.STABILITY


def _factor_strength(factors: Sequence[TrendFactor], factor_type: FactorType) -> float:
    for factor in factors:
        if factor.factor_type == factor_type:
            return factor.influence_strength
    return 0.0


def calculate_empowerment_potential(factors: Sequence[TrendFactor]) -> float:
    return (
        0.6 * _factor_strength(factors, FactorType.LIBERATION)
        + 0.4 * _factor_strength(factors, FactorType.COMMUNITY)
    )


def assess_liberation_implications(trend: CommunityTrend, trajectory: Trajectory) -> list[str]:
    implications = []
    if trend.liberation_impact > _STRONG_IMPACT:
        implications.append("Strong potential for community empowerment")
    if trajectory == Trajectory.GROWTH:
        implications.append("Growing liberation consciousness in community")
    return implications


def generate_action_recommendations(trend: CommunityTrend, trajectory: Trajectory) -> list[str]:
    actions = []
    if trajectory == Trajectory.GROWTH and trend.liberation_impact > _AMPLIFY_IMPACT:
        actions.append("Amplify and promote this trend for maximum community benefit")
    if trend.avg_quality_score < _LOW_QUALITY:
        actions.append("Focus on improving content quality in this category")
    return actions


def predict_trend(trend: CommunityTrend) -> TrendPrediction:
    factors = identify_trend_factors(trend)
    trajectory = predict_trajectory(trend, factors)
    return TrendPrediction(
        trend_id=trend.id,
        category=trend.category,
        predicted_trajectory=trajectory,
        confidence=trend.confidence_level,
        factors=factors,
        liberation_implications=assess_liberation_implications(trend, trajectory),
        community_empowerment_potential=calculate_empowerment_potential(factors),
        recommended_actions=generate_action_recommendations(trend, trajectory),
    )


def predict_trajectories(trends: Iterable[CommunityTrend]) -> list[TrendPrediction]:
    """Predictions sorted descending by empowerment potential (stable)."""
    predictions = [predict_trend(t) for t in trends]
    return sorted(
        predictions, key=lambda p: p.community_empowerment_potential, reverse=True
    )
