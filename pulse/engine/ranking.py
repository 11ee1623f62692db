"""
pulse.engine.ranking — Confidence gate & ranker
================================================
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pulse.constants import RANK_INTEREST_WEIGHT, RANK_LIBERATION_WEIGHT
from pulse.engine.models import CommunityTrend

logger = logging.getLogger(__name__)

__all__ = ["gate_by_confidence", "rank_trends", "trend_rank_score"]


def trend_rank_score(trend: CommunityTrend) -> float:
    return (
        RANK_LIBERATION_WEIGHT * trend.liberation_impact
        + RANK_INTEREST_WEIGHT * trend.community_interest_score
    )


def gate_by_confidence(
    trends: Iterable[CommunityTrend], threshold: float
) -> tuple[list[CommunityTrend], list[str]]:
    """Split *trends* into (kept, dropped category names)."""
    kept: list[CommunityTrend] = []
    dropped: list[str] = []
    for trend in trends:
        if trend.confidence_level >= threshold:
            kept.append(trend)
        else:
            logger.debug(
                "Gated %s: confidence %.3f < %.3f",
                trend.category, trend.confidence_level, threshold,
            )
            dropped.append(trend.category)
    return kept, dropped


def rank_trends(trends: Iterable[CommunityTrend]) -> list[CommunityTrend]:
    """Descending by rank score; ties keep discovery order (stable sort)."""
    return sorted(trends, key=trend_rank_score, reverse=True)
