"""Aggregate metrics over a loaded ``VideoDataset``.

Every function here is pure: it reads the dataset, builds a fresh frame and
returns a new value. Nothing is cached, so results always reflect the
dataset passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

import numpy as np
import pandas as pd

from .config import DEFAULT_TOP_CREATORS
from .ingest import VideoDataset


LANGUAGE_LABELS: Dict[str, str] = {
    "un": "Undefined",
    "fr": "French",
    "eng-US": "English",
}

TOP_CREATOR_COLUMNS = ["name", "followers", "engagement", "views"]
LANGUAGE_COLUMNS = ["name", "value", "percentage"]
HOURLY_COLUMNS = ["hour", "label", "avg_engagement"]
CORRELATION_COLUMNS = ["views", "engagement", "followers"]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a dashboard would display it: halves go away from zero."""
    if value is None or not np.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def _ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


@dataclass(frozen=True)
class EngagementTotals:
    videos: int
    views: int
    likes: int
    comments: int
    shares: int

    @property
    def engagement(self) -> int:
        return self.likes + self.comments + self.shares

    @property
    def average_engagement(self) -> float:
        """Mean per-video engagement, 0 for an empty dataset."""
        return _ratio(self.engagement, self.videos)


@dataclass(frozen=True)
class EngagementRatios:
    """Percentages shown in the "detailed metrics" panel, two decimals."""

    engagement_rate: float
    likes_per_view: float
    comments_per_like: float
    shares_per_view: float


@dataclass(frozen=True)
class KeyInsights:
    engagement_rate: float
    top_language: Optional[str]
    top_language_share: float
    top_creator_engagement: int


def compute_totals(dataset: VideoDataset) -> EngagementTotals:
    df = dataset.to_frame()
    return EngagementTotals(
        videos=len(df),
        views=int(df["play_count"].sum()),
        likes=int(df["digg_count"].sum()),
        comments=int(df["comment_count"].sum()),
        shares=int(df["share_count"].sum()),
    )


def average_engagement(dataset: VideoDataset) -> float:
    return compute_totals(dataset).average_engagement


def engagement_ratios(dataset: VideoDataset) -> EngagementRatios:
    totals = compute_totals(dataset)
    return EngagementRatios(
        engagement_rate=round_half_up(_ratio(totals.likes + totals.comments, totals.views) * 100, 2),
        likes_per_view=round_half_up(_ratio(totals.likes, totals.views) * 100, 2),
        comments_per_like=round_half_up(_ratio(totals.comments, totals.likes) * 100, 2),
        shares_per_view=round_half_up(_ratio(totals.shares, totals.views) * 100, 2),
    )


def top_creators(dataset: VideoDataset, limit: int = DEFAULT_TOP_CREATORS) -> pd.DataFrame:
    """Rank videos by engagement and keep the first ``limit``.

    One row per video, not per author: a creator with several strong videos
    shows up several times. Ties keep their load order.
    """
    df = dataset.to_frame()
    ranked = (
        df.loc[:, ["author", "followers", "engagement", "play_count"]]
        .rename(columns={"author": "name", "play_count": "views"})
        .sort_values("engagement", ascending=False, kind="stable")
        .head(max(limit, 0))
        .reset_index(drop=True)
    )
    return ranked[TOP_CREATOR_COLUMNS]


def language_label(code: str) -> str:
    return LANGUAGE_LABELS.get(code, code)


def language_distribution(dataset: VideoDataset) -> pd.DataFrame:
    """Video count and share per language label, in order of first appearance."""
    df = dataset.to_frame()
    if df.empty:
        return pd.DataFrame(columns=LANGUAGE_COLUMNS)

    total = len(df)
    counts = (
        df.assign(name=df["language"].map(language_label))
        .groupby("name", sort=False)
        .size()
        .reset_index(name="value")
    )
    counts["value"] = counts["value"].astype(int)
    counts["percentage"] = counts["value"].map(
        lambda value: round_half_up(_ratio(value, total) * 100, 1)
    )
    return counts[LANGUAGE_COLUMNS]


def hourly_engagement(dataset: VideoDataset) -> pd.DataFrame:
    """Average engagement per publication hour (0-23), ascending by hour."""
    df = dataset.to_frame()
    if df.empty:
        return pd.DataFrame(columns=HOURLY_COLUMNS)

    hourly = (
        df.groupby("hour", sort=True)
        .agg(total_engagement=("engagement", "sum"), count=("engagement", "size"))
        .reset_index()
    )
    hourly["hour"] = hourly["hour"].astype(int)
    hourly["label"] = hourly["hour"].map(lambda hour: f"{hour}h")
    hourly["avg_engagement"] = [
        int(round_half_up(_ratio(total, count)))
        for total, count in zip(hourly["total_engagement"], hourly["count"])
    ]
    return hourly[HOURLY_COLUMNS]


def correlation_points(dataset: VideoDataset) -> pd.DataFrame:
    """(views, engagement, followers) for videos with both views and engagement."""
    df = dataset.to_frame()
    points = df.loc[
        (df["play_count"] > 0) & (df["engagement"] > 0),
        ["play_count", "engagement", "followers"],
    ].rename(columns={"play_count": "views"})
    return points.reset_index(drop=True)[CORRELATION_COLUMNS]


def key_insights(dataset: VideoDataset) -> KeyInsights:
    languages = language_distribution(dataset)
    creators = top_creators(dataset, limit=1)

    if languages.empty:
        top_language, top_share = None, 0.0
    else:
        top_language = str(languages.iloc[0]["name"])
        top_share = float(languages.iloc[0]["percentage"])

    return KeyInsights(
        engagement_rate=engagement_ratios(dataset).engagement_rate,
        top_language=top_language,
        top_language_share=top_share,
        top_creator_engagement=int(creators.iloc[0]["engagement"]) if not creators.empty else 0,
    )
