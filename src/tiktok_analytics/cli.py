"""
Print the dashboard aggregates for a TikTok scraper export.

    tiktok-analytics --csv data/dataset_tiktok-scraper.csv --tz Europe/Paris

Reads the CSV once, computes the same metrics the Streamlit dashboard shows
and prints them as plain-text tables. Nothing is written to disk.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

import pandas as pd

from . import metrics
from .config import DashboardConfig
from .errors import DashboardConfigError, DatasetLoadError
from .ingest import VideoDataset, load_videos
from .logging_utils import configure_logging

EXIT_LOAD_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _print_table(title: str, df: pd.DataFrame) -> None:
    print(f"\n{title}")
    print("-" * len(title))
    if df.empty:
        print("(no data)")
    else:
        print(df.to_string(index=False))


def render_report(dataset: VideoDataset, top: int) -> None:
    totals = metrics.compute_totals(dataset)
    ratios = metrics.engagement_ratios(dataset)

    print(f"Source             : {dataset.source}")
    print(f"Total videos       : {totals.videos:,}")
    print(f"Total views        : {totals.views / 1_000_000:.1f}M")
    print(f"Total likes        : {totals.likes:,}")
    print(f"Total comments     : {totals.comments:,}")
    print(f"Total shares       : {totals.shares:,}")
    print(f"Average engagement : {metrics.round_half_up(totals.average_engagement):,.0f}")
    print(f"Engagement rate    : {ratios.engagement_rate:.2f}%")
    print(f"Likes / views      : {ratios.likes_per_view:.2f}%")
    print(f"Comments / likes   : {ratios.comments_per_like:.2f}%")
    print(f"Shares / views     : {ratios.shares_per_view:.2f}%")

    _print_table(f"Top {top} creators by engagement", metrics.top_creators(dataset, limit=top))
    _print_table("Language distribution", metrics.language_distribution(dataset))
    _print_table(
        "Engagement by publication hour",
        metrics.hourly_engagement(dataset).loc[:, ["label", "avg_engagement"]],
    )
    points = metrics.correlation_points(dataset)
    print(f"\nCorrelation points : {len(points):,}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarise a TikTok scraper CSV export.")
    parser.add_argument("--csv", type=Path, default=None, help="CSV export to load.")
    parser.add_argument("--tz", default=None, help="IANA time zone for hourly grouping (default: local).")
    parser.add_argument("--top", type=int, default=None, help="Number of top creators to list.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO).")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    try:
        config = DashboardConfig.from_env().with_overrides(
            csv_path=args.csv,
            timezone_name=args.tz,
            top_creators=args.top,
            log_level=args.log_level,
        )
    except DashboardConfigError as error:
        print(f"Configuration error: {error}")
        return EXIT_CONFIG_ERROR

    configure_logging(config.log_level)
    try:
        dataset = load_videos(config.csv_path, tz=config.timezone())
    except DatasetLoadError as error:
        print(f"Error: {error}")
        return EXIT_LOAD_ERROR

    render_report(dataset, config.top_creators)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
