"""
pulse.engine.emerging — Emerging topic detection
=================================================

Compares each topic's per-day mention rate in the current span
(``comparison`` → ``current``) against its rate in the baseline span
(``baseline_start`` → ``comparison``).  Comparing rates rather than raw
counts keeps spans of different length comparable.

Topic extraction, the emergence test and the per-topic scorers sit behind
the :class:`TopicSignals` protocol so they can be replaced without
touching the ranking contract:

    extract → baseline → is_emerging? → score → rank (top 10)

The default :class:`BaselineTopicSignals` uses record tags plus the
category label as topics.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from pulse.constants import (
    DEFAULT_LIBERATION_IMPACT,
    EMERGING_BASELINE_RATIO,
    EMERGING_MIN_MENTIONS,
    EMERGING_TOPIC_LIMIT,
)
from pulse.engine.models import JsonMixin
from pulse.engine.records import ContentRecord, clamp01, mean, parse_timestamp
from pulse.engine.trends import record_interest

__all__ = [
    "BaselineTopicSignals",
    "EmergenceWindow",
    "EmergingTopic",
    "TopicActivity",
    "TopicSignals",
    "emerging_rank_score",
    "identify_emerging_topics",
]

# Spans shorter than a day are rated as one day.
_MIN_RATE_DAYS = 1.0


def _days(start: datetime, end: datetime) -> float:
    return max(0.0, (end - start).total_seconds() / 86400)


def _per_day(count: int, days: float) -> float:
    return count / max(days, _MIN_RATE_DAYS)


@dataclass(frozen=True, slots=True)
class EmergenceWindow:
    """Current span ``[comparison, current]``, baseline ``[baseline_start, comparison)``.

    Without an explicit ``baseline_start`` the baseline is as long as the
    current span and ends at the cutoff.
    """

    current: datetime
    comparison: datetime
    baseline_start: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "current", parse_timestamp(self.current))
        object.__setattr__(self, "comparison", parse_timestamp(self.comparison))
        if self.baseline_start is None:
            start = self.comparison - (self.current - self.comparison)
        else:
            start = parse_timestamp(self.baseline_start)
        object.__setattr__(self, "baseline_start", min(start, self.comparison))

    @property
    def current_days(self) -> float:
        return _days(self.comparison, self.current)

    @property
    def baseline_days(self) -> float:
        return _days(self.baseline_start, self.comparison)

    def is_current(self, record: ContentRecord) -> bool:
        return self.comparison <= record.created_at <= self.current

    def is_baseline(self, record: ContentRecord) -> bool:
        return self.baseline_start <= record.created_at < self.comparison


@dataclass(frozen=True, slots=True)
class TopicActivity:
    """One topic's mentions in both spans, plus the span lengths."""

    topic: str
    current: tuple[ContentRecord, ...]
    historical: tuple[ContentRecord, ...]
    current_days: float
    baseline_days: float

    @property
    def current_rate(self) -> float:
        return _per_day(len(self.current), self.current_days)

    @property
    def baseline_rate(self) -> float:
        return _per_day(len(self.historical), self.baseline_days)


@dataclass(frozen=True, slots=True)
class EmergingTopic(JsonMixin):
    """``growth_velocity`` is the relative change in daily rate (≥ -1, unbounded above)."""

    topic: str
    emergence_strength: float
    liberation_alignment: float
    community_engagement: float
    growth_velocity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "emergence_strength", clamp01(self.emergence_strength))
        object.__setattr__(self, "liberation_alignment", clamp01(self.liberation_alignment))
        object.__setattr__(self, "community_engagement", clamp01(self.community_engagement))
        object.__setattr__(self, "growth_velocity", max(-1.0, self.growth_velocity))


class TopicSignals(Protocol):
    def extract_topics(self, records: Sequence[ContentRecord]) -> dict[str, list[ContentRecord]]: ...

    def is_emerging(self, activity: TopicActivity) -> bool: ...

    def emergence_strength(self, activity: TopicActivity) -> float: ...

    def liberation_alignment(self, activity: TopicActivity) -> float: ...

    def engagement(self, activity: TopicActivity) -> float: ...

    def growth_velocity(self, activity: TopicActivity) -> float: ...


def _topics_of(record: ContentRecord) -> list[str]:
    labels = [record.category, *record.tags]
    seen: list[str] = []
    for label in labels:
        key = label.strip().lower()
        if key and key not in seen:
            seen.append(key)
    return seen


class BaselineTopicSignals:
    """Daily mention rate in the current span vs the baseline span.

    A topic emerges when it has at least ``min_mentions`` current mentions
    and its current rate exceeds ``baseline_ratio`` × its baseline rate.
    """

    def __init__(
        self,
        min_mentions: int = EMERGING_MIN_MENTIONS,
        baseline_ratio: float = EMERGING_BASELINE_RATIO,
    ) -> None:
        self.min_mentions = min_mentions
        self.baseline_ratio = baseline_ratio

    def extract_topics(self, records):
        topics: dict[str, list[ContentRecord]] = {}
        for record in records:
            for topic in _topics_of(record):
                topics.setdefault(topic, []).append(record)
        return topics

    def is_emerging(self, activity):
        return (
            len(activity.current) >= self.min_mentions
            and activity.current_rate > self.baseline_ratio * activity.baseline_rate
        )

    def emergence_strength(self, activity):
        if activity.current_rate == 0:
            return 0.0
        return 1 - activity.baseline_rate / activity.current_rate

    def liberation_alignment(self, activity):
        value = mean(
            r.liberation_alignment_score for r in activity.current
            if r.liberation_alignment_score is not None
        )
        return DEFAULT_LIBERATION_IMPACT if value is None else value

    def engagement(self, activity):
        return mean(record_interest(r) for r in activity.current) or 0.0

    def growth_velocity(self, activity):
        # An empty baseline is rated as a single mention across its span.
        floor = _per_day(1, activity.baseline_days)
        return (activity.current_rate - activity.baseline_rate) / max(activity.baseline_rate, floor)


def emerging_rank_score(topic: EmergingTopic) -> float:
    return (
        0.4 * topic.liberation_alignment
        + 0.3 * topic.emergence_strength
        + 0.3 * topic.community_engagement
    )


def identify_emerging_topics(
    records: Iterable[ContentRecord],
    window: EmergenceWindow,
    signals: TopicSignals | None = None,
    limit: int = EMERGING_TOPIC_LIMIT,
) -> list[EmergingTopic]:
    """Top *limit* emerging topics, highest rank score first."""
    signals = signals or BaselineTopicSignals()
    records = list(records)
    current_topics = signals.extract_topics([r for r in records if window.is_current(r)])
    baseline_topics = signals.extract_topics([r for r in records if window.is_baseline(r)])

    emerging: list[EmergingTopic] = []
    for topic, current in current_topics.items():
        activity = TopicActivity(
            topic=topic,
            current=tuple(current),
            historical=tuple(baseline_topics.get(topic, ())),
            current_days=window.current_days,
            baseline_days=window.baseline_days,
        )
        if not signals.is_emerging(activity):
            continue
        emerging.append(
            EmergingTopic(
                topic=topic,
                emergence_strength=signals.emergence_strength(activity),
                liberation_alignment=signals.liberation_alignment(activity),
                community_engagement=signals.engagement(activity),
                growth_velocity=signals.growth_velocity(activity),
            )
        )

    emerging.sort(key=emerging_rank_score, reverse=True)
    return emerging[:limit]
