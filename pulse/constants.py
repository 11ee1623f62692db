"""
pulse.constants — Shared Constants & Lookup Tables
===================================================

Single source of truth for the engine's thresholds, documented defaults
and keyword tables.  Every table is wrapped in :class:`MappingProxyType`
so it is read-only for the lifetime of the process.
"""

from __future__ import annotations

from types import MappingProxyType

# ---------------------------------------------------------------------------
# Documented defaults for missing fields
# ---------------------------------------------------------------------------
DEFAULT_LIBERATION_IMPACT = 0.5   # neutral when no record carries a score
DEFAULT_QUALITY_SCORE = 0.7       # optimistic default
DEFAULT_COMMUNITY_RATING = 3.5    # midpoint of the 0–5 scale
DEFAULT_CATEGORY = "General"

# ---------------------------------------------------------------------------
# Filter / calculator thresholds
# ---------------------------------------------------------------------------
LIBERATION_ALIGNMENT_THRESHOLD = 0.6
TREND_STRENGTH_MIN_RECORDS = 3
TREND_REFERENCE_WINDOW_DAYS = 30
CONFIDENCE_SAMPLE_SIZE = 50
VOTE_NORMALIZER = 100
RATING_SCALE = 5.0
ENGAGEMENT_VALUE_NORMALIZER = 1000
STABLE_CHANGE_RATIO = 0.1

# Ranking composite (§ ranking)
RANK_LIBERATION_WEIGHT = 0.6
RANK_INTEREST_WEIGHT = 0.4

# ---------------------------------------------------------------------------
# Engagement metrics and their community-impact base weights
# ---------------------------------------------------------------------------
ENGAGEMENT_METRICS: tuple[str, ...] = ("views", "shares", "discussions", "ratings")

ENGAGEMENT_IMPACT_WEIGHTS: MappingProxyType[str, float] = MappingProxyType({
    "views": 0.3,
    "shares": 0.8,
    "discussions": 0.9,
    "ratings": 0.7,
})
DEFAULT_ENGAGEMENT_IMPACT_WEIGHT = 0.5

# ---------------------------------------------------------------------------
# Demographic dimensions (pre-bucketed, never individual-level)
# ---------------------------------------------------------------------------
DEMOGRAPHIC_DIMENSIONS: tuple[str, ...] = ("age_range", "identity_group", "location_type")
UNDISCLOSED_BUCKET = "undisclosed"

# ---------------------------------------------------------------------------
# Category slug → liberation weight reference table
# ---------------------------------------------------------------------------
LIBERATION_WEIGHTS: MappingProxyType[str, float] = MappingProxyType({
    "community-organizing": 0.95,
    "economic-justice": 0.92,
    "anti-oppression": 0.90,
    "creator-sovereignty": 0.88,
    "healing-centered": 0.85,
    "cultural-authenticity": 0.83,
    "democratic-participation": 0.80,
    "joy-celebration": 0.78,
    "mutual-aid": 0.85,
    "platform-sovereignty": 0.87,
})


def liberation_weight(category: str, default: float = 0.0) -> float:
    """Look up the reference weight for a category slug (case-insensitive)."""
    return LIBERATION_WEIGHTS.get(category.strip().lower(), default)


# ---------------------------------------------------------------------------
# Empowerment metric → category keywords
# ---------------------------------------------------------------------------
EMPOWERMENT_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "organizing_potential": ("organizing", "activism", "movement", "collective", "mobilize"),
    "healing_impact": ("healing", "wellness", "therapy", "support", "care"),
    "joy_celebration": ("joy", "celebration", "happiness", "festival", "art"),
    "economic_justice_focus": ("economic", "finance", "wage", "wealth", "justice"),
    "cultural_authenticity": ("culture", "heritage", "tradition", "identity", "authenticity"),
    "democratic_participation": ("democratic", "vote", "governance", "participation", "consensus"),
    "creator_sovereignty": ("creator", "artist", "ownership", "sovereignty", "rights"),
    "anti_oppression_alignment": ("justice", "liberation", "equality", "anti-racist", "freedom"),
})
KEYWORD_MATCH_SCORE = 0.8
KEYWORD_MISS_SCORE = 0.3

# ---------------------------------------------------------------------------
# Emerging topic detection defaults
# ---------------------------------------------------------------------------
EMERGING_TOPIC_LIMIT = 10
EMERGING_MIN_MENTIONS = 2
EMERGING_BASELINE_RATIO = 1.5
