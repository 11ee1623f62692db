"""
pulse.engine.demographics — Anonymized demographic aggregation
===============================================================

Pluggable aggregation step behind :class:`DemographicAggregator`.  The
default :class:`BucketedDemographics` only ever reads *pre-bucketed*
labels carried on each record (``record.demographics[dimension]``) and
only emits shares per bucket — it never sees or returns record ids,
contributor ids or any other individual-level value.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pulse.constants import DEMOGRAPHIC_DIMENSIONS, UNDISCLOSED_BUCKET
from pulse.engine.models import DemographicInsight
from pulse.engine.records import ContentRecord, mean

__all__ = ["BucketedDemographics", "DemographicAggregator", "analyze_demographics"]


class DemographicAggregator(Protocol):
    def aggregate(
        self, records: Sequence[ContentRecord], dimension: str
    ) -> DemographicInsight: ...


def _spread(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    return max(values) - min(values)


class BucketedDemographics:
    """Share of records per bucket label, plus cross-bucket spreads.

    Records without a label for the dimension fall into ``"undisclosed"``.
    Variations are the spread (max − min) of per-bucket mean engagement
    and per-bucket mean alignment.
    """

    def aggregate(
        self, records: Sequence[ContentRecord], dimension: str
    ) -> DemographicInsight:
        buckets: dict[str, list[ContentRecord]] = {}
        for record in records:
            label = record.demographics.get(dimension) or UNDISCLOSED_BUCKET
            buckets.setdefault(str(label), []).append(record)

        total = len(records)
        distribution = {
            label: len(members) / total for label, members in sorted(buckets.items())
        } if total else {}

        engagement_means = [
            mean(r.engagement_score for r in members) for members in buckets.values()
        ]
        alignment_means = [
            m for m in (
                mean(
                    r.liberation_alignment_score for r in members
                    if r.liberation_alignment_score is not None
                )
                for members in buckets.values()
            )
            if m is not None
        ]

        return DemographicInsight(
            dimension=dimension,
            distribution=distribution,
            engagement_variation=_spread([m for m in engagement_means if m is not None]),
            liberation_impact_variation=_spread(alignment_means),
        )


_DEFAULT_AGGREGATOR = BucketedDemographics()


def analyze_demographics(
    records: Sequence[ContentRecord],
    aggregator: DemographicAggregator | None = None,
    dimensions: Sequence[str] = DEMOGRAPHIC_DIMENSIONS,
) -> list[DemographicInsight]:
    """One insight per dimension, in the fixed dimension order."""
    aggregator = aggregator or _DEFAULT_AGGREGATOR
    return [aggregator.aggregate(records, dimension) for dimension in dimensions]
