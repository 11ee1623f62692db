"""
tests/test_emerging.py — Emerging topic detection
==================================================
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from conftest import NOW, make_record

from pulse.engine.emerging import (
    BaselineTopicSignals,
    EmergenceWindow,
    EmergingTopic,
    TopicActivity,
    emerging_rank_score,
    identify_emerging_topics,
)

# Current span: last 7 days.  Baseline: the 7 days before that.
WEEK = EmergenceWindow(current=NOW, comparison=NOW - timedelta(days=7))


def _activity(current: int, historical: int, current_days=7.0, baseline_days=7.0, **fields):
    return TopicActivity(
        topic="arts",
        current=tuple(make_record(**fields) for _ in range(current)),
        historical=tuple(make_record() for _ in range(historical)),
        current_days=current_days,
        baseline_days=baseline_days,
    )


class TestEmergenceWindow:
    def test_default_baseline_mirrors_current_span(self):
        assert WEEK.baseline_start == NOW - timedelta(days=14)
        assert WEEK.current_days == pytest.approx(7)
        assert WEEK.baseline_days == pytest.approx(7)

    def test_explicit_baseline_start(self):
        window = EmergenceWindow(
            current=NOW,
            comparison=NOW - timedelta(days=7),
            baseline_start=NOW - timedelta(days=30),
        )
        assert window.baseline_days == pytest.approx(23)

    def test_span_membership(self):
        assert WEEK.is_current(make_record(days_ago=7))
        assert not WEEK.is_baseline(make_record(days_ago=7))
        assert WEEK.is_baseline(make_record(days_ago=14))
        assert not WEEK.is_baseline(make_record(days_ago=15))
        assert not WEEK.is_current(make_record(days_ago=-1))


class TestBaselineSignals:
    def test_topics_are_category_and_tags(self):
        records = [make_record("Arts", tags=("Murals", "arts"))]
        topics = BaselineTopicSignals().extract_topics(records)
        assert list(topics) == ["arts", "murals"]

    def test_emergence_needs_minimum_mentions(self):
        signals = BaselineTopicSignals()
        assert not signals.is_emerging(_activity(1, 0))
        assert signals.is_emerging(_activity(2, 0))

    def test_emergence_compares_daily_rates(self):
        signals = BaselineTopicSignals()
        # 3 vs 1 over equal spans clears the 1.5× bar; 4 vs 3 does not
        assert signals.is_emerging(_activity(3, 1))
        assert not signals.is_emerging(_activity(4, 3))

    def test_longer_baseline_is_normalized(self):
        """7 mentions in 7 days against 23 in 23 days is a flat rate."""
        activity = _activity(7, 23, current_days=7, baseline_days=23)
        assert activity.current_rate == pytest.approx(activity.baseline_rate)
        assert not BaselineTopicSignals().is_emerging(activity)

    def test_strength(self):
        signals = BaselineTopicSignals()
        assert signals.emergence_strength(_activity(4, 1)) == pytest.approx(0.75)
        assert signals.emergence_strength(_activity(4, 0)) == pytest.approx(1.0)

    def test_velocity_is_relative_rate_change(self):
        signals = BaselineTopicSignals()
        assert signals.growth_velocity(_activity(4, 1)) == pytest.approx(3.0)
        assert signals.growth_velocity(_activity(1, 2)) == pytest.approx(-0.5)

    def test_velocity_distinguishes_sizes_of_new_topics(self):
        signals = BaselineTopicSignals()
        small = signals.growth_velocity(_activity(2, 1))
        large = signals.growth_velocity(_activity(7, 0))
        assert small == pytest.approx(1.0)
        assert large == pytest.approx(7.0)

    def test_alignment_defaults_to_neutral(self):
        activity = _activity(1, 0, liberation_alignment_score=None)
        assert BaselineTopicSignals().liberation_alignment(activity) == 0.5


class TestIdentifyEmergingTopics:
    def test_new_tag_emerges(self):
        records = [
            make_record("housing-justice", days_ago=12),
            make_record("housing-justice", days_ago=10),
            make_record("housing-justice", days_ago=2, tags=("rent-strike",)),
            make_record("housing-justice", days_ago=1, tags=("rent-strike",)),
        ]
        topics = identify_emerging_topics(records, WEEK)
        assert [t.topic for t in topics] == ["rent-strike"]
        topic = topics[0]
        assert topic.emergence_strength == 1.0
        assert topic.growth_velocity == pytest.approx(2.0)
        assert topic.liberation_alignment == pytest.approx(0.8)

    def test_records_before_baseline_are_ignored(self):
        records = [make_record("arts", days_ago=d) for d in (1, 2)]
        records += [make_record("arts", days_ago=d) for d in (20, 21, 22, 23)]
        assert [t.topic for t in identify_emerging_topics(records, WEEK)] == ["arts"]

    def test_records_after_window_are_ignored(self):
        records = [make_record(days_ago=-1, tags=("future",)) for _ in range(3)]
        assert identify_emerging_topics(records, WEEK) == []

    def test_no_records(self):
        assert identify_emerging_topics([], WEEK) == []

    def test_limited_and_ranked(self):
        records = []
        for i in range(12):
            score = 0.3 + i * 0.05
            records += [
                make_record(f"topic-{i:02d}", days_ago=1, liberation_alignment_score=score)
                for _ in range(2)
            ]
        topics = identify_emerging_topics(records, WEEK)
        assert len(topics) == 10
        assert topics[0].topic == "topic-11"
        scores = [emerging_rank_score(t) for t in topics]
        assert scores == sorted(scores, reverse=True)

    def test_custom_signals(self):
        class EverythingEmerges(BaselineTopicSignals):
            def is_emerging(self, activity):
                return True

        records = [make_record("arts", days_ago=1)]
        topics = identify_emerging_topics(records, WEEK, EverythingEmerges())
        assert [t.topic for t in topics] == ["arts"]


class TestEmergingTopic:
    def test_values_clamped(self):
        topic = EmergingTopic(
            topic="x",
            emergence_strength=2.0,
            liberation_alignment=-1.0,
            community_engagement=0.5,
            growth_velocity=-4.0,
        )
        assert topic.emergence_strength == 1.0
        assert topic.liberation_alignment == 0.0
        assert topic.growth_velocity == -1.0

    def test_velocity_not_capped_above(self):
        assert EmergingTopic("x", 1.0, 1.0, 1.0, 6.0).growth_velocity == 6.0

    def test_rank_score(self):
        topic = EmergingTopic("x", 1.0, 1.0, 1.0, 0.0)
        assert emerging_rank_score(topic) == pytest.approx(1.0)
