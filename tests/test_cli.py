"""Tests for the plain-text summary command."""

from __future__ import annotations

import pytest

from tiktok_analytics.cli import EXIT_CONFIG_ERROR, EXIT_LOAD_ERROR, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in (
        "TIKTOK_DASHBOARD_CSV",
        "TIKTOK_DASHBOARD_TZ",
        "TIKTOK_DASHBOARD_TOP_CREATORS",
        "TIKTOK_DASHBOARD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_main_prints_summary(sample_csv, capsys) -> None:
    exit_code = main(["--csv", str(sample_csv), "--tz", "UTC", "--top", "2"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Total videos       : 6" in out
    assert "Total likes        : 1,130" in out
    assert "Average engagement : 215" in out
    assert "Top 2 creators by engagement" in out
    assert "Alice" in out and "Carol" in out
    assert "Dave" not in out
    assert "French" in out
    assert "Correlation points : 4" in out


def test_main_reports_missing_file(tmp_path, capsys) -> None:
    exit_code = main(["--csv", str(tmp_path / "nope.csv")])

    assert exit_code == EXIT_LOAD_ERROR
    assert "file not found" in capsys.readouterr().out


def test_main_rejects_bad_config(sample_csv, capsys) -> None:
    exit_code = main(["--csv", str(sample_csv), "--top", "0"])

    assert exit_code == EXIT_CONFIG_ERROR
    assert "Configuration error" in capsys.readouterr().out
