"""Runtime configuration for the dashboard and the CLI.

This module owns all environment variable parsing. Other modules receive a
typed ``DashboardConfig`` instead of reading the environment themselves.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import DashboardConfigError

DEFAULT_CSV_NAME = "dataset_tiktok-scraper.csv"
DEFAULT_TOP_CREATORS = 5
DEFAULT_LOG_LEVEL = "INFO"

ENV_CSV_PATH = "TIKTOK_DASHBOARD_CSV"
ENV_TIMEZONE = "TIKTOK_DASHBOARD_TZ"
ENV_TOP_CREATORS = "TIKTOK_DASHBOARD_TOP_CREATORS"
ENV_LOG_LEVEL = "TIKTOK_DASHBOARD_LOG_LEVEL"


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def default_csv_path() -> Path:
    return _project_root() / "data" / DEFAULT_CSV_NAME


@dataclass(frozen=True)
class DashboardConfig:
    """Validated runtime configuration.

    Attributes:
        csv_path: CSV export to load.
        timezone_name: IANA zone used for hour-of-day grouping, ``None`` for
            the system local zone.
        top_creators: Number of entries kept by the top creators ranking.
        log_level: Level name for the package logger.
    """

    csv_path: Path
    timezone_name: str | None = None
    top_creators: int = DEFAULT_TOP_CREATORS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """Build config from process environment variables.

        Raises:
            DashboardConfigError: If an environment value is invalid.
        """
        csv_value = os.getenv(ENV_CSV_PATH)
        csv_path = Path(csv_value).expanduser() if csv_value else default_csv_path()
        timezone_name = os.getenv(ENV_TIMEZONE) or None
        top_creators = _parse_top_creators(os.getenv(ENV_TOP_CREATORS, str(DEFAULT_TOP_CREATORS)))
        log_level = _parse_log_level(os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))

        config = cls(
            csv_path=csv_path,
            timezone_name=timezone_name,
            top_creators=top_creators,
            log_level=log_level,
        )
        config.timezone()
        return config

    def with_overrides(
        self,
        *,
        csv_path: Path | None = None,
        timezone_name: str | None = None,
        top_creators: int | None = None,
        log_level: str | None = None,
    ) -> "DashboardConfig":
        """Return a copy with the given non-``None`` values replaced and validated."""
        changes: dict[str, object] = {}
        if csv_path is not None:
            changes["csv_path"] = Path(csv_path).expanduser()
        if timezone_name is not None:
            changes["timezone_name"] = timezone_name or None
        if top_creators is not None:
            changes["top_creators"] = _parse_top_creators(str(top_creators))
        if log_level is not None:
            changes["log_level"] = _parse_log_level(log_level)
        updated = replace(self, **changes)
        updated.timezone()
        return updated

    def timezone(self) -> tzinfo | None:
        """Resolve ``timezone_name``; ``None`` means system local time."""
        if self.timezone_name is None:
            return None
        try:
            return ZoneInfo(self.timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as error:
            raise DashboardConfigError(
                f"Invalid {ENV_TIMEZONE} value: unknown time zone '{self.timezone_name}'."
            ) from error


def _parse_top_creators(raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError as error:
        raise DashboardConfigError(
            f"Invalid {ENV_TOP_CREATORS} value: expected integer, got '{raw_value}'."
        ) from error
    if value < 1:
        raise DashboardConfigError(
            f"Invalid {ENV_TOP_CREATORS} value: expected a positive integer, got {value}."
        )
    return value


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise DashboardConfigError(f"Invalid {ENV_LOG_LEVEL} value: unknown level '{raw_value}'.")
    return level
