"""
pulse.engine.pipeline — The full analysis chain
================================================

Pure calculation pipeline.  No database I/O, no network I/O, no clock
reads; the caller supplies the snapshot and the timeframe.

Pipeline stages:
  records → Liberation Filter → Categorize → Trend Calculate → Confidence Gate
  → Rank → Predict → Empowerment Aggregate → Emerging Topics → Report
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

from pulse.config import AnalysisConfig
from pulse.engine.demographics import DemographicAggregator
from pulse.engine.emerging import (
    EmergenceWindow,
    EmergingTopic,
    TopicSignals,
    identify_emerging_topics,
)
from pulse.engine.empowerment import calculate_empowerment_metrics
from pulse.engine.filters import filter_liberation_aligned, group_by_category
from pulse.engine.models import CommunityEmpowermentMetrics, CommunityTrend, TrendPrediction
from pulse.engine.prediction import predict_trajectories
from pulse.engine.ranking import gate_by_confidence, rank_trends
from pulse.engine.records import ContentRecord, Timeframe
from pulse.engine.report import InsightsReport, build_insights_report
from pulse.engine.trends import calculate_category_trend

logger = logging.getLogger(__name__)

__all__ = [
    "InsightsBundle",
    "TrendAnalysis",
    "analyze_community_trends",
    "default_emergence_window",
    "run_pipeline",
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TrendAnalysis:
    """Ranked trends plus what was left out and why."""

    trends: tuple[CommunityTrend, ...]
    skipped_categories: tuple[str, ...] = ()  # fewer than min_data_points
    gated_categories: tuple[str, ...] = ()    # below confidence_threshold

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_categories)


@dataclass(frozen=True, slots=True)
class InsightsBundle:
    """Everything one analysis run produces."""

    analysis: TrendAnalysis
    predictions: tuple[TrendPrediction, ...]
    empowerment_metrics: CommunityEmpowermentMetrics
    emerging_topics: tuple[EmergingTopic, ...]
    report: InsightsReport
    timeframe: Timeframe
    record_count: int = 0
    community_validation_required: bool = True

    @property
    def trends(self) -> tuple[CommunityTrend, ...]:
        return self.analysis.trends

    def to_dict(self) -> dict:
        return {
            "timeframe": {
                "start": self.timeframe.start.isoformat(),
                "end": self.timeframe.end.isoformat(),
            },
            "record_count": self.record_count,
            "community_validation_required": self.community_validation_required,
            "trends": [t.to_dict() for t in self.analysis.trends],
            "skipped_categories": list(self.analysis.skipped_categories),
            "gated_categories": list(self.analysis.gated_categories),
            "predictions": [p.to_dict() for p in self.predictions],
            "empowerment_metrics": self.empowerment_metrics.to_dict(),
            "emerging_topics": [e.to_dict() for e in self.emerging_topics],
            "report": self.report.to_dict(),
        }


# ---------------------------------------------------------------------------
# Stages 1–5: filter → categorize → calculate → gate → rank
# ---------------------------------------------------------------------------
def analyze_community_trends(
    records: Iterable[ContentRecord],
    timeframe: Timeframe,
    config: AnalysisConfig,
    *,
    demographics: DemographicAggregator | None = None,
) -> TrendAnalysis:
    """Ranked :class:`CommunityTrend` list for one snapshot.

    Categories below ``min_data_points`` are skipped (never raised) and
    reported in ``skipped_categories``.
    """
    working = filter_liberation_aligned(records, config.liberation_focus)
    groups = group_by_category(working)

    candidates: list[CommunityTrend] = []
    skipped: list[str] = []
    for category, items in groups.items():
        if len(items) < config.min_data_points:
            logger.debug(
                "Skipped %s: %d records < min_data_points %d",
                category, len(items), config.min_data_points,
            )
            skipped.append(category)
            continue
        candidates.append(
            calculate_category_trend(
                category, items, timeframe, config, demographics=demographics
            )
        )

    kept, gated = gate_by_confidence(candidates, config.confidence_threshold)
    return TrendAnalysis(
        trends=tuple(rank_trends(kept)),
        skipped_categories=tuple(skipped),
        gated_categories=tuple(gated),
    )


def default_emergence_window(timeframe: Timeframe, days: int) -> EmergenceWindow:
    """Trailing *days* of the timeframe are "current"; the rest is the baseline.

    The cutoff never falls before the timeframe midpoint, so a timeframe
    of *days* or less still splits into two halves with a real baseline.
    """
    cutoff = max(timeframe.midpoint, timeframe.end - timedelta(days=days))
    return EmergenceWindow(
        current=timeframe.end, comparison=cutoff, baseline_start=timeframe.start
    )


# ---------------------------------------------------------------------------
# Full run
# ---------------------------------------------------------------------------
def run_pipeline(
    records: Iterable[ContentRecord],
    timeframe: Timeframe,
    config: AnalysisConfig,
    *,
    emergence_window: EmergenceWindow | None = None,
    emergence_window_days: int = 7,
    topic_signals: TopicSignals | None = None,
    demographics: DemographicAggregator | None = None,
) -> InsightsBundle:
    """Run every stage over one immutable snapshot.

    This is a PURE function — running it twice on the same snapshot and
    config yields identical output.
    """
    snapshot = list(records)
    analysis = analyze_community_trends(
        snapshot, timeframe, config, demographics=demographics
    )
    predictions = predict_trajectories(analysis.trends)
    metrics = calculate_empowerment_metrics(analysis.trends)

    window = emergence_window or default_emergence_window(timeframe, emergence_window_days)
    emerging = identify_emerging_topics(snapshot, window, topic_signals)

    report = build_insights_report(
        analysis.trends, metrics, predictions, config.privacy_level
    )

    categories = (
        len(analysis.trends) + analysis.skipped_count + len(analysis.gated_categories)
    )
    logger.info(
        "Analysis run: %d records, %d categories → %d trends (%d skipped, %d gated), "
        "%d emerging topics",
        len(snapshot),
        categories,
        len(analysis.trends),
        len(analysis.skipped_categories),
        len(analysis.gated_categories),
        len(emerging),
    )

    return InsightsBundle(
        analysis=analysis,
        predictions=tuple(predictions),
        empowerment_metrics=metrics,
        emerging_topics=tuple(emerging),
        report=report,
        timeframe=timeframe,
        record_count=len(snapshot),
        community_validation_required=config.community_validation_required,
    )
