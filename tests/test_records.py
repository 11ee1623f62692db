"""
tests/test_records.py — ContentRecord normalization & default resolution
=========================================================================
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from conftest import NOW, make_record

from pulse.engine.filters import filter_liberation_aligned
from pulse.engine.records import (
    ContentRecord,
    Timeframe,
    resolve_community_rating,
    resolve_liberation_impact,
    resolve_quality_score,
)


class TestFromMapping:
    def test_primary_category_wins(self):
        rec = ContentRecord.from_mapping(
            {"id": 1, "primary_category": "mutual-aid", "category": "news",
             "created_at": "2025-06-01T10:00:00Z"}
        )
        assert rec.category == "mutual-aid"
        assert rec.id == "1"

    def test_falls_back_to_category_then_general(self):
        rec = ContentRecord.from_mapping({"category": "news", "created_at": "2025-06-01"})
        assert rec.category == "news"
        rec = ContentRecord.from_mapping({"created_at": "2025-06-01"})
        assert rec.category == "General"

    def test_contributor_resolution_order(self):
        rec = ContentRecord.from_mapping(
            {"created_at": "2025-06-01", "curator_id": "cur-1", "submitted_by": "sub-1"}
        )
        assert rec.contributor_id == "cur-1"
        rec = ContentRecord.from_mapping({"created_at": "2025-06-01"})
        assert rec.contributor_id is None

    def test_iso_timestamp_is_aware_utc(self):
        rec = ContentRecord.from_mapping({"created_at": "2025-06-01T10:00:00+02:00"})
        assert rec.created_at == datetime(2025, 6, 1, 8, 0, tzinfo=UTC)

    def test_missing_timestamp_rejected(self):
        with pytest.raises(ValueError, match="created_at"):
            ContentRecord.from_mapping({"id": "x"})

    def test_malformed_timestamp_rejected(self):
        with pytest.raises(ValueError):
            ContentRecord.from_mapping({"id": "x", "created_at": "last tuesday"})

    def test_absent_numbers_stay_absent(self):
        rec = ContentRecord.from_mapping({"created_at": "2025-06-01"})
        assert rec.liberation_alignment_score is None
        assert rec.quality_score is None
        assert rec.community_rating is None
        assert rec.views is None
        assert rec.total_votes == 0
        assert rec.engagement_score == 0.0


class TestClamping:
    def test_scores_clamped_into_range(self):
        rec = make_record(
            liberation_alignment_score=1.4,
            quality_score=-0.2,
            community_rating=9,
            engagement_score=3,
            total_votes=-5,
        )
        assert rec.liberation_alignment_score == 1.0
        assert rec.quality_score == 0.0
        assert rec.community_rating == 5.0
        assert rec.engagement_score == 1.0
        assert rec.total_votes == 0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_scores_are_absent(self, bad):
        rec = make_record(
            liberation_alignment_score=bad,
            quality_score=bad,
            community_rating=bad,
            views=bad,
        )
        assert rec.liberation_alignment_score is None
        assert rec.quality_score is None
        assert rec.community_rating is None
        assert rec.views is None

    def test_nan_alignment_does_not_pass_filter(self):
        rec = make_record(liberation_alignment_score=float("nan"))
        assert filter_liberation_aligned([rec], liberation_focus=True) == []
        assert resolve_liberation_impact([rec]) == 0.5

    def test_non_finite_counters_fall_back_to_zero(self):
        rec = make_record(total_votes=float("nan"), engagement_score=float("inf"))
        assert rec.total_votes == 0
        assert rec.engagement_score == 0.0

    def test_unknown_metric_name(self):
        with pytest.raises(KeyError):
            make_record().metric("likes")


class TestDefaultResolution:
    def test_liberation_impact_default_is_neutral(self):
        records = [make_record(liberation_alignment_score=None) for _ in range(3)]
        assert resolve_liberation_impact(records) == 0.5

    def test_liberation_impact_ignores_absent(self):
        records = [
            make_record(liberation_alignment_score=0.9),
            make_record(liberation_alignment_score=None),
            make_record(liberation_alignment_score=0.7),
        ]
        assert resolve_liberation_impact(records) == pytest.approx(0.8)

    def test_quality_and_rating_defaults(self):
        """A category with no quality scores or ratings uses 0.7 / 3.5."""
        records = [make_record() for _ in range(4)]
        assert resolve_quality_score(records) == 0.7
        assert resolve_community_rating(records) == 3.5

    def test_empty_list_resolves_to_zero(self):
        assert resolve_liberation_impact([]) == 0.0
        assert resolve_quality_score([]) == 0.0
        assert resolve_community_rating([]) == 0.0

    def test_present_values_are_averaged(self):
        records = [make_record(community_rating=4), make_record(community_rating=2)]
        assert resolve_community_rating(records) == 3.0


class TestTimeframe:
    def test_span_and_midpoint(self):
        tf = Timeframe(start=NOW - timedelta(days=10), end=NOW)
        assert tf.span_days == 10
        assert tf.midpoint == NOW - timedelta(days=5)

    def test_trailing(self):
        tf = Timeframe.trailing(7, now=NOW)
        assert tf.end == NOW
        assert tf.start == NOW - timedelta(days=7)

    def test_accepts_iso_strings(self):
        tf = Timeframe(start="2025-06-01T00:00:00Z", end="2025-06-02T00:00:00Z")
        assert tf.span_days == 1
