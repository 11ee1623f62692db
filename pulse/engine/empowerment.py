"""
pulse.engine.empowerment — Community empowerment metrics
=========================================================

Eight weighted averages over the trend set.  A trend's contribution to a
metric is a coarse keyword test on its category label: 0.8 when any of
the metric's keywords appears in the lower-cased category, else 0.3.
Each trend is weighted by the mean of its liberation impact and
community interest.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pulse.constants import EMPOWERMENT_KEYWORDS, KEYWORD_MATCH_SCORE, KEYWORD_MISS_SCORE
from pulse.engine.models import CommunityEmpowermentMetrics, CommunityTrend

__all__ = ["calculate_empowerment_metrics", "metric_contribution", "trend_weight"]


def metric_contribution(
    trend: CommunityTrend,
    metric: str,
    keywords: Mapping[str, Sequence[str]] = EMPOWERMENT_KEYWORDS,
) -> float:
    category = trend.category.lower()
    if any(keyword in category for keyword in keywords.get(metric, ())):
        return KEYWORD_MATCH_SCORE
    return KEYWORD_MISS_SCORE


def trend_weight(trend: CommunityTrend) -> float:
    return (trend.liberation_impact + trend.community_interest_score) / 2


def calculate_empowerment_metrics(
    trends: Sequence[CommunityTrend],
) -> CommunityEmpowermentMetrics:
    """Weighted average per metric; all zeros when there is nothing to weigh."""
    totals = dict.fromkeys(EMPOWERMENT_KEYWORDS, 0.0)
    total_weight = 0.0

    for trend in trends:
        weight = trend_weight(trend)
        total_weight += weight
        for metric in totals:
            totals[metric] += metric_contribution(trend, metric) * weight

    if total_weight <= 0:
        return CommunityEmpowermentMetrics()
    return CommunityEmpowermentMetrics(
        **{metric: value / total_weight for metric, value in totals.items()}
    )
