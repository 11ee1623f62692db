"""
tests/test_empowerment.py — Community empowerment metrics
==========================================================
"""

from __future__ import annotations

import pytest
from conftest import make_trend

from pulse.constants import LIBERATION_WEIGHTS, liberation_weight
from pulse.engine.empowerment import (
    calculate_empowerment_metrics,
    metric_contribution,
    trend_weight,
)
from pulse.engine.models import CommunityEmpowermentMetrics


class TestMetricContribution:
    def test_keyword_match(self):
        trend = make_trend("community-organizing")
        assert metric_contribution(trend, "organizing_potential") == 0.8
        assert metric_contribution(trend, "healing_impact") == 0.3

    def test_match_is_case_insensitive(self):
        assert metric_contribution(make_trend("Healing-Circles"), "healing_impact") == 0.8

    def test_one_category_can_match_several_metrics(self):
        trend = make_trend("housing-justice")
        assert metric_contribution(trend, "economic_justice_focus") == 0.8
        assert metric_contribution(trend, "anti_oppression_alignment") == 0.8
        assert metric_contribution(trend, "joy_celebration") == 0.3

    def test_custom_keywords(self):
        trend = make_trend("tenant-union")
        keywords = {"organizing_potential": ("union",)}
        assert metric_contribution(trend, "organizing_potential", keywords) == 0.8


class TestCalculateEmpowermentMetrics:
    def test_no_trends_gives_zeros(self):
        assert calculate_empowerment_metrics([]) == CommunityEmpowermentMetrics()

    def test_zero_weight_gives_zeros(self):
        trends = [make_trend(liberation_impact=0.0, community_interest_score=0.0)]
        metrics = calculate_empowerment_metrics(trends)
        assert all(value == 0.0 for _, value in metrics.items())

    def test_single_trend_passes_contribution_through(self):
        metrics = calculate_empowerment_metrics([make_trend("community-organizing")])
        assert metrics.organizing_potential == pytest.approx(0.8)
        assert metrics.healing_impact == pytest.approx(0.3)

    def test_weighted_average(self):
        trends = [
            make_trend("community-organizing", liberation_impact=0.8, community_interest_score=0.8),
            make_trend("news", liberation_impact=0.2, community_interest_score=0.2),
        ]
        assert trend_weight(trends[0]) == pytest.approx(0.8)
        metrics = calculate_empowerment_metrics(trends)
        # (0.8 × 0.8 + 0.3 × 0.2) / (0.8 + 0.2)
        assert metrics.organizing_potential == pytest.approx(0.70)
        assert metrics.healing_impact == pytest.approx(0.3)

    def test_metric_order(self):
        names = [name for name, _ in CommunityEmpowermentMetrics().items()]
        assert names == [
            "organizing_potential",
            "healing_impact",
            "joy_celebration",
            "economic_justice_focus",
            "cultural_authenticity",
            "democratic_participation",
            "creator_sovereignty",
            "anti_oppression_alignment",
        ]


class TestLiberationWeights:
    def test_lookup_is_case_insensitive(self):
        assert liberation_weight("Community-Organizing ") == 0.95

    def test_unknown_category_uses_default(self):
        assert liberation_weight("news") == 0.0
        assert liberation_weight("news", default=0.5) == 0.5

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            LIBERATION_WEIGHTS["news"] = 1.0  # type: ignore[index]
