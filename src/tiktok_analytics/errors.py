"""Exception hierarchy for the TikTok analytics dashboard.

Only load-level problems are raised. Field-level parse failures inside a
row always degrade to defaults and never surface as errors.
"""

from __future__ import annotations

from pathlib import Path


class DashboardError(Exception):
    """Base exception for all dashboard failures."""


class DashboardConfigError(DashboardError):
    """Raised for invalid runtime configuration."""


class DatasetLoadError(DashboardError):
    """Raised when the CSV export cannot be read at all."""

    def __init__(self, source: Path, reason: str) -> None:
        super().__init__(f"Could not load dataset from {source}: {reason}")
        self.source = source
        self.reason = reason
