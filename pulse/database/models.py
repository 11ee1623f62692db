"""
pulse.database.models — Read-only mapping of the community content table
=========================================================================

The content store is owned by the ingestion layer (webhook handlers write
rows; this package only reads them).  The mapping below declares just the
columns the insights engine consumes.

Tables:
- community_content — one row per published article / post / event
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Pulse ORM models."""


# ---------------------------------------------------------------------------
# CommunityContent — the snapshot source
# ---------------------------------------------------------------------------
class CommunityContent(Base):
    __tablename__ = "community_content"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    primary_category: Mapped[str | None] = mapped_column(String(100), default=None)
    category: Mapped[str | None] = mapped_column(String(100), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Scores (nullable; absent is not zero)
    liberation_alignment_score: Mapped[float | None] = mapped_column(Float, default=None)
    quality_score: Mapped[float | None] = mapped_column(Float, default=None)
    community_rating: Mapped[float | None] = mapped_column(Float, default=None)
    total_votes: Mapped[int] = mapped_column(Integer, default=0)
    engagement_score: Mapped[float] = mapped_column(Float, default=0.0)

    # Authorship: first present wins
    author: Mapped[str | None] = mapped_column(String(100), default=None)
    curator_id: Mapped[str | None] = mapped_column(String(100), default=None)
    submitted_by: Mapped[str | None] = mapped_column(String(100), default=None)

    # Optional engagement counters
    views: Mapped[int | None] = mapped_column(Integer, default=None)
    shares: Mapped[int | None] = mapped_column(Integer, default=None)
    discussions: Mapped[int | None] = mapped_column(Integer, default=None)
    ratings: Mapped[int | None] = mapped_column(Integer, default=None)

    tags: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    # Pre-bucketed audience labels, e.g. {"age_range": "25-34"}
    demographics: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    __table_args__ = (
        Index("ix_community_content_created_at", "created_at"),
    )

    def to_mapping(self) -> dict:
        """Plain dict in the shape :meth:`ContentRecord.from_mapping` expects."""
        return {
            "id": self.id,
            "primary_category": self.primary_category,
            "category": self.category,
            "created_at": self.created_at,
            "liberation_alignment_score": self.liberation_alignment_score,
            "quality_score": self.quality_score,
            "community_rating": self.community_rating,
            "total_votes": self.total_votes,
            "engagement_score": self.engagement_score,
            "author": self.author,
            "curator_id": self.curator_id,
            "submitted_by": self.submitted_by,
            "views": self.views,
            "shares": self.shares,
            "discussions": self.discussions,
            "ratings": self.ratings,
            "tags": self.tags or [],
            "demographics": self.demographics or {},
        }

    def __repr__(self) -> str:
        return f"<CommunityContent id={self.id!r} category={self.category!r}>"
