"""TikTok scraper export analytics: ingestion, aggregates and charts."""

from .errors import DashboardConfigError, DashboardError, DatasetLoadError
from .ingest import VideoDataset, VideoRecord, load_videos

__all__ = [
    "DashboardConfigError",
    "DashboardError",
    "DatasetLoadError",
    "VideoDataset",
    "VideoRecord",
    "load_videos",
]
