"""
pulse.errors — Error taxonomy
==============================

Only two things abort an analysis run: a bad configuration (caught at
construction time) and a failed snapshot fetch.  Everything else is
absorbed per category by the engine.
"""

from __future__ import annotations

__all__ = ["ConfigurationError", "InputFetchError", "PulseError"]


class PulseError(Exception):
    """Base class for all Pulse errors."""


class ConfigurationError(PulseError, ValueError):
    """An analysis option is outside its allowed range."""


class InputFetchError(PulseError):
    """The content-record supplier failed or missed its deadline.

    Fatal for the run — no partial report is produced.
    """
