"""
pulse.engine.filters — Liberation filter & categorizer
=======================================================

The first two pipeline stages.  Both are pure: they never modify the
records they are given.
"""

from __future__ import annotations

from collections.abc import Iterable

from pulse.constants import LIBERATION_ALIGNMENT_THRESHOLD
from pulse.engine.records import ContentRecord

__all__ = ["filter_liberation_aligned", "group_by_category", "is_liberation_aligned"]


def is_liberation_aligned(record: ContentRecord) -> bool:
    """True when the record carries an alignment score of at least 0.6.

    An absent score never passes.
    """
    score = record.liberation_alignment_score
    return score is not None and score >= LIBERATION_ALIGNMENT_THRESHOLD


def filter_liberation_aligned(
    records: Iterable[ContentRecord], liberation_focus: bool
) -> list[ContentRecord]:
    """Keep only aligned records when *liberation_focus* is on."""
    if not liberation_focus:
        return list(records)
    return [r for r in records if is_liberation_aligned(r)]


def group_by_category(records: Iterable[ContentRecord]) -> dict[str, list[ContentRecord]]:
    """Group records by category label.

    Keys appear in order of first discovery; every list is non-empty.
    """
    groups: dict[str, list[ContentRecord]] = {}
    for record in records:
        groups.setdefault(record.category, []).append(record)
    return groups
