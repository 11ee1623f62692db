"""
pulse.engine.report — Insights report builder
==============================================

Pure transformation of (trends, empowerment metrics, predictions) into the
human-readable report shown on the community dashboard.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pulse.config import PrivacyLevel
from pulse.engine.models import (
    CommunityEmpowermentMetrics,
    CommunityTrend,
    JsonMixin,
    TrendPrediction,
)

__all__ = ["InsightsReport", "build_insights_report"]

_MAX_KEY_INSIGHTS = 5
_MAX_ACTIONS = 5
_MAX_CELEBRATIONS = 3
_HIGHLIGHT_THRESHOLD = 0.7
_EMPOWERMENT_AREA_THRESHOLD = 0.6
_ACTION_POTENTIAL_THRESHOLD = 0.8
_CELEBRATION_IMPACT_THRESHOLD = 0.8

LIBERATION_HIGHLIGHTS: dict[str, str] = {
    "organizing_potential": "Strong community organizing potential identified",
    "healing_impact": "Significant healing-centered content engagement",
    "joy_celebration": "Vibrant Black joy and celebration themes trending",
    "economic_justice_focus": "Economic justice conversations gaining momentum",
    "cultural_authenticity": "Culturally authentic storytelling resonating with the community",
    "democratic_participation": "High democratic participation in community governance",
    "creator_sovereignty": "Creators asserting ownership and sovereignty over their work",
    "anti_oppression_alignment": "Strong anti-oppression alignment across community content",
}


@dataclass(frozen=True, slots=True)
class InsightsReport(JsonMixin):
    summary: str
    key_insights: tuple[str, ...]
    liberation_highlights: tuple[str, ...]
    community_empowerment_areas: tuple[str, ...]
    recommended_actions: tuple[str, ...]
    celebration_moments: tuple[str, ...]
    demographic_highlights: tuple[str, ...] = ()


def _percent(value: float) -> int:
    return int(value * 100 + 0.5)


def _summary(trends: Sequence[CommunityTrend]) -> str:
    if not trends:
        return "No community trends met the confidence threshold for this period."
    return (
        "Community trends analysis shows strong liberation alignment with "
        f"{len(trends)} active trends identified."
    )


def _key_insights(trends: Sequence[CommunityTrend]) -> list[str]:
    return [
        f"{t.category} showing {'growth' if t.growth_rate > 0 else 'stability'} "
        f"with {_percent(t.liberation_impact)}% liberation alignment"
        for t in trends[:_MAX_KEY_INSIGHTS]
    ]


def _demographic_highlights(trends: Sequence[CommunityTrend]) -> list[str]:
    lines = []
    for trend in trends:
        for insight in trend.demographic_insights:
            if not insight.distribution:
                continue
            bucket, share = max(insight.distribution.items(), key=lambda kv: kv[1])
            lines.append(
                f"{trend.category}: {insight.dimension.replace('_', ' ')} led by "
                f"'{bucket}' ({_percent(share)}%)"
            )
    return lines


def build_insights_report(
    trends: Sequence[CommunityTrend],
    metrics: CommunityEmpowermentMetrics,
    predictions: Sequence[TrendPrediction],
    privacy_level: PrivacyLevel = PrivacyLevel.COMMUNITY,
) -> InsightsReport:
    """Assemble the report.  Demographic lines appear only at ``detailed``."""
    metric_values = metrics.items()

    highlights = [
        LIBERATION_HIGHLIGHTS[name]
        for name, value in metric_values
        if value > _HIGHLIGHT_THRESHOLD
    ]
    areas = [
        name.replace("_", " ")
        for name, value in metric_values
        if value > _EMPOWERMENT_AREA_THRESHOLD
    ]
    actions = [
        f"Amplify {p.category} for maximum community benefit"
        for p in predictions
        if p.community_empowerment_potential > _ACTION_POTENTIAL_THRESHOLD
    ][:_MAX_ACTIONS]
    celebrations = [
        f"{t.category} achieving high liberation alignment"
        for t in trends
        if t.liberation_impact > _CELEBRATION_IMPACT_THRESHOLD
    ][:_MAX_CELEBRATIONS]

    demographic = (
        _demographic_highlights(trends)
        if PrivacyLevel(privacy_level) == PrivacyLevel.DETAILED
        else []
    )

    return InsightsReport(
        summary=_summary(trends),
        key_insights=tuple(_key_insights(trends)),
        liberation_highlights=tuple(highlights),
        community_empowerment_areas=tuple(areas),
        recommended_actions=tuple(actions),
        celebration_moments=tuple(celebrations),
        demographic_highlights=tuple(demographic),
    )
