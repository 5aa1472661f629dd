"""Unit tests for environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from tiktok_analytics.config import (
    DEFAULT_CSV_NAME,
    DashboardConfig,
)
from tiktok_analytics.errors import DashboardConfigError

ENV_VARS = [
    "TIKTOK_DASHBOARD_CSV",
    "TIKTOK_DASHBOARD_TZ",
    "TIKTOK_DASHBOARD_TOP_CREATORS",
    "TIKTOK_DASHBOARD_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    config = DashboardConfig.from_env()

    assert config.csv_path.name == DEFAULT_CSV_NAME
    assert config.csv_path.parent.name == "data"
    assert config.timezone_name is None
    assert config.timezone() is None
    assert config.top_creators == 5
    assert config.log_level == "INFO"


def test_environment_values_are_used(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TIKTOK_DASHBOARD_CSV", str(tmp_path / "export.csv"))
    monkeypatch.setenv("TIKTOK_DASHBOARD_TZ", "Europe/Paris")
    monkeypatch.setenv("TIKTOK_DASHBOARD_TOP_CREATORS", "3")
    monkeypatch.setenv("TIKTOK_DASHBOARD_LOG_LEVEL", "debug")

    config = DashboardConfig.from_env()

    assert config.csv_path == tmp_path / "export.csv"
    assert str(config.timezone()) == "Europe/Paris"
    assert config.top_creators == 3
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("TIKTOK_DASHBOARD_TOP_CREATORS", "five"),
        ("TIKTOK_DASHBOARD_TOP_CREATORS", "0"),
        ("TIKTOK_DASHBOARD_TZ", "Mars/Olympus_Mons"),
        ("TIKTOK_DASHBOARD_LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_environment_values_raise(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(DashboardConfigError) as excinfo:
        DashboardConfig.from_env()

    assert name in str(excinfo.value)


def test_with_overrides_replaces_only_given_values() -> None:
    base = DashboardConfig(csv_path=Path("a.csv"), top_creators=5)

    updated = base.with_overrides(csv_path=Path("b.csv"), top_creators=10)

    assert updated.csv_path == Path("b.csv")
    assert updated.top_creators == 10
    assert updated.log_level == base.log_level
    assert base.csv_path == Path("a.csv")


def test_with_overrides_validates() -> None:
    base = DashboardConfig(csv_path=Path("a.csv"))

    with pytest.raises(DashboardConfigError):
        base.with_overrides(top_creators=-1)
    with pytest.raises(DashboardConfigError):
        base.with_overrides(timezone_name="Not/AZone")


def test_top_creators_default_is_shared_with_metrics() -> None:
    from tiktok_analytics import config, metrics

    assert metrics.DEFAULT_TOP_CREATORS is config.DEFAULT_TOP_CREATORS
    assert DashboardConfig(csv_path=Path("a.csv")).top_creators == metrics.DEFAULT_TOP_CREATORS
