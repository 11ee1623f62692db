"""
pulse.config — YAML Configuration Loader
=========================================

**Why this file exists:**
Analysis options (period label, liberation focus, privacy level, data
thresholds) are read once from ``config.yaml`` and frozen for the lifetime
of the process.  Secrets such as ``DATABASE_URL`` stay in ``.env``.

Usage::

    from pulse.config import load_config

    cfg = load_config()                     # reads ./config.yaml by default
    print(cfg.analysis.min_data_points)     # 10
    print(cfg.analysis.privacy_level)       # PrivacyLevel.COMMUNITY
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from pulse.errors import ConfigurationError


class AnalysisPeriod(enum.StrEnum):
    """Label stored on every trend; does not change the math."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class PrivacyLevel(enum.StrEnum):
    """How much demographic detail may be surfaced."""
    PUBLIC = "public"
    COMMUNITY = "community"
    DETAILED = "detailed"


def _coerce_enum(enum_cls: type[enum.StrEnum], value, option: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(
            f"{option} must be one of: {allowed} (got {value!r})"
        ) from None


# ---------------------------------------------------------------------------
# Analysis options — validated at construction time
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Immutable options for one analysis run.

    Raises
    ------
    ConfigurationError
        If ``confidence_threshold`` is outside [0, 1], ``min_data_points``
        is below 1, or a label is not recognized.
    """

    analysis_period: AnalysisPeriod = AnalysisPeriod.WEEKLY
    liberation_focus: bool = True
    community_validation_required: bool = True
    privacy_level: PrivacyLevel = PrivacyLevel.COMMUNITY
    min_data_points: int = 10
    confidence_threshold: float = 0.7

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "analysis_period",
            _coerce_enum(AnalysisPeriod, self.analysis_period, "analysis_period"),
        )
        object.__setattr__(
            self, "privacy_level",
            _coerce_enum(PrivacyLevel, self.privacy_level, "privacy_level"),
        )
        if isinstance(self.min_data_points, bool) or not isinstance(self.min_data_points, int):
            raise ConfigurationError(
                f"min_data_points must be an integer (got {self.min_data_points!r})"
            )
        if self.min_data_points < 1:
            raise ConfigurationError(
                f"min_data_points must be >= 1 (got {self.min_data_points})"
            )
        try:
            threshold = float(self.confidence_threshold)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"confidence_threshold must be a number (got {self.confidence_threshold!r})"
            ) from None
        if not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(
                f"confidence_threshold must be within [0, 1] (got {threshold})"
            )
        object.__setattr__(self, "confidence_threshold", threshold)

    @property
    def suppress_demographics(self) -> bool:
        return self.privacy_level == PrivacyLevel.PUBLIC


# ---------------------------------------------------------------------------
# Process-level settings
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class PulseConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    community_name: str = "Community"
    fetch_timeout_seconds: float = 30.0
    emergence_window_days: int = 7
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    def __post_init__(self) -> None:
        try:
            timeout = float(self.fetch_timeout_seconds)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"fetch_timeout_seconds must be a number (got {self.fetch_timeout_seconds!r})"
            ) from None
        if not (math.isfinite(timeout) and timeout > 0):
            raise ConfigurationError(
                f"fetch_timeout_seconds must be positive (got {timeout})"
            )
        object.__setattr__(self, "fetch_timeout_seconds", timeout)

        days = self.emergence_window_days
        if isinstance(days, bool):
            raise ConfigurationError(f"emergence_window_days must be an integer (got {days!r})")
        try:
            days = int(days)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"emergence_window_days must be an integer (got {self.emergence_window_days!r})"
            ) from None
        if days < 1:
            raise ConfigurationError(f"emergence_window_days must be >= 1 (got {days})")
        object.__setattr__(self, "emergence_window_days", days)


_ANALYSIS_KEYS = (
    "analysis_period",
    "liberation_focus",
    "community_validation_required",
    "privacy_level",
    "min_data_points",
    "confidence_threshold",
)


def analysis_config_from_dict(raw: dict | None) -> AnalysisConfig:
    """Build an :class:`AnalysisConfig` from a plain mapping.

    Unknown keys are ignored; missing keys keep their defaults.
    """
    raw = raw or {}
    kwargs = {key: raw[key] for key in _ANALYSIS_KEYS if key in raw}
    return AnalysisConfig(**kwargs)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> PulseConfig:
    """Read *path* and return a :class:`PulseConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    ConfigurationError
        If any option is out of range.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return PulseConfig(
        community_name=raw.get("community_name", "Community"),
        fetch_timeout_seconds=raw.get("fetch_timeout_seconds", 30.0),
        emergence_window_days=raw.get("emergence_window_days", 7),
        analysis=analysis_config_from_dict(raw.get("analysis")),
    )
