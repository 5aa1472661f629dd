"""Shared fixtures for dashboard tests."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from tiktok_analytics.ingest import VideoDataset, VideoRecord, load_videos

FIXTURES = Path(__file__).resolve().parent / "fixtures"
LOADED_AT = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)


def fixture_path(relative_path: str) -> Path:
    return FIXTURES / relative_path


@pytest.fixture
def sample_csv() -> Path:
    return fixture_path("videos_sample.csv")


@pytest.fixture
def sample_dataset(sample_csv) -> VideoDataset:
    return load_videos(sample_csv, tz=timezone.utc, now=LOADED_AT)


@pytest.fixture
def make_dataset():
    """Build a dataset straight from records, bypassing the CSV reader."""

    def _make(*records: VideoRecord) -> VideoDataset:
        return VideoDataset(records=tuple(records), source=Path("memory.csv"), loaded_at=LOADED_AT)

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop console handlers bound to a test's captured stream."""
    yield
    logger = logging.getLogger("tiktok_analytics")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
