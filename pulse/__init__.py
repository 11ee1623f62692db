"""
Pulse — Community Trend Insights Engine
========================================
Turns a snapshot of community content (articles, posts, ratings) into
ranked trend summaries, trajectory forecasts, empowerment metrics and a
human-readable insights report for the community dashboard.

Package layout::

    pulse/
    ├── config.py          # YAML → typed Python config
    ├── errors.py          # Error taxonomy (config / fetch)
    ├── constants.py       # Immutable keyword and weight tables
    ├── engine/
    │   ├── records.py     # ContentRecord + default resolution
    │   ├── models.py      # CommunityTrend, TrendPrediction, …
    │   ├── filters.py     # Liberation filter + categorizer
    │   ├── demographics.py # Bucketed, anonymized distributions
    │   ├── trends.py      # Per-category trend calculation
    │   ├── ranking.py     # Confidence gate + ranker
    │   ├── prediction.py  # Trajectory predictor
    │   ├── empowerment.py # Empowerment metric aggregation
    │   ├── emerging.py    # Emerging topic detection
    │   ├── report.py      # Insights report builder
    │   └── pipeline.py    # The full filter → report chain
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   └── models.py      # Read-only mapping of the content table
    ├── services/
    │   ├── content_service.py  # Snapshot fetch
    │   └── insights_service.py # Fetch-with-deadline + pipeline
    └── api/
        ├── main.py        # FastAPI app
        └── routes/        # Insights endpoint
"""

__version__ = "0.1.0"
