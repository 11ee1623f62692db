"""
pulse.api.deps — FastAPI dependency injection
==============================================
"""

from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import Engine

from pulse.config import PulseConfig, load_config
from pulse.database.engine import create_db_engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_config() -> PulseConfig:
    return load_config(os.getenv("PULSE_CONFIG", "config.yaml"))
