"""
Streamlit dashboard for a TikTok scraper CSV export.

The app loads a single export once per session, configured through
`TIKTOK_DASHBOARD_CSV` (defaults to ./data/dataset_tiktok-scraper.csv):

    streamlit run streamlit_app.py

Aggregates are recomputed from the loaded dataset on every rerun; only the
file load itself is cached.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import streamlit as st

from tiktok_analytics import charts, metrics
from tiktok_analytics.config import DashboardConfig
from tiktok_analytics.errors import DashboardConfigError, DatasetLoadError
from tiktok_analytics.ingest import VideoDataset, load_videos
from tiktok_analytics.logging_utils import configure_logging


@st.cache_data(show_spinner=False)
def load_dataset(csv_path: str, timezone_name: str | None) -> VideoDataset:
    """Load the export once; errors are not cached so a fixed file is picked up on rerun."""
    config = DashboardConfig(csv_path=Path(csv_path), timezone_name=timezone_name)
    return load_videos(config.csv_path, tz=config.timezone())


def render_kpis(dataset: VideoDataset) -> None:
    totals = metrics.compute_totals(dataset)

    kpi_cols = st.columns(5)
    kpi_cols[0].metric("Total Videos", f"{totals.videos:,}", help="Sample analysed")
    kpi_cols[1].metric("Total Views", f"{totals.views / 1_000_000:.1f}M", help="Total reach")
    kpi_cols[2].metric("Total Likes", f"{totals.likes:,}", help="Positive engagement")
    kpi_cols[3].metric("Comments", f"{totals.comments:,}", help="Interactions")
    kpi_cols[4].metric(
        "Average Engagement",
        f"{metrics.round_half_up(totals.average_engagement):,.0f}",
        help="Likes + comments + shares per video",
    )


def render_overview(dataset: VideoDataset) -> None:
    left, right = st.columns(2)

    with left:
        st.subheader("Language Distribution")
        languages = metrics.language_distribution(dataset)
        if languages.empty:
            st.info("No language data available.")
        else:
            st.altair_chart(charts.language_pie(languages), width="stretch")

    with right:
        st.subheader("Detailed Metrics")
        ratios = metrics.engagement_ratios(dataset)
        details = pd.DataFrame(
            [
                ("Average engagement rate", ratios.engagement_rate),
                ("Likes / views", ratios.likes_per_view),
                ("Comments / likes", ratios.comments_per_like),
                ("Shares / views", ratios.shares_per_view),
            ],
            columns=["metric", "percent"],
        )
        details["percent"] = details["percent"].map(lambda value: f"{value:.2f}%")
        st.dataframe(details, hide_index=True, width="stretch")


def render_top_creators(dataset: VideoDataset, limit: int) -> None:
    st.subheader(f"Top {limit} Creators by Engagement")
    creators = metrics.top_creators(dataset, limit=limit)
    if creators.empty:
        st.info("No creator data available.")
        return

    st.altair_chart(charts.top_creators_bar(creators), width="stretch")
    st.dataframe(
        creators.rename(
            columns={
                "name": "Creator",
                "followers": "Followers",
                "engagement": "Engagement",
                "views": "Views",
            }
        ),
        hide_index=True,
        width="stretch",
    )


def render_temporal(dataset: VideoDataset) -> None:
    st.subheader("Engagement by Publication Hour")
    hourly = metrics.hourly_engagement(dataset)
    if hourly.empty:
        st.info("No publication times available.")
        return
    st.altair_chart(charts.hourly_line(hourly), width="stretch")


def render_correlation(dataset: VideoDataset) -> None:
    st.subheader("Views vs Engagement")
    points = metrics.correlation_points(dataset)
    if points.empty:
        st.info("No videos with both views and engagement.")
        return
    st.altair_chart(charts.correlation_scatter(points), width="stretch")
    st.caption(f"{len(points):,} videos plotted.")


def render_key_insights(dataset: VideoDataset) -> None:
    insights = metrics.key_insights(dataset)
    st.subheader("Key Insights")
    cols = st.columns(3)
    cols[0].markdown(
        f"**Engagement:** the average engagement rate is {insights.engagement_rate:.2f}%, "
        "indicating an active audience."
    )
    if insights.top_language is not None:
        cols[1].markdown(
            f"**Content:** {insights.top_language} accounts for "
            f"{insights.top_language_share:.1f}% of the analysed content."
        )
    else:
        cols[1].markdown("**Content:** no language data available.")
    cols[2].markdown(
        "**Performance:** the most engaging creators generate "
        f"{insights.top_creator_engagement:,} interactions."
    )


def main() -> None:
    st.set_page_config(page_title="TikTok Analytics Dashboard", layout="wide")
    st.title("TikTok Analysis: \"For You\" Tag")
    st.caption("Performance and trend analysis of a TikTok scraper export.")

    try:
        config = DashboardConfig.from_env()
    except DashboardConfigError as error:
        st.error(str(error))
        return
    configure_logging(config.log_level)

    try:
        with st.spinner("Analysing TikTok data..."):
            dataset = load_dataset(str(config.csv_path), config.timezone_name)
    except DatasetLoadError as error:
        st.error(f"Failed to load data: {error.reason}")
        st.caption(f"Source: {error.source}")
        return

    st.sidebar.header("Dataset")
    st.sidebar.write(f"Source: `{dataset.source}`")
    st.sidebar.write(f"Loaded at: {dataset.loaded_at:%Y-%m-%d %H:%M:%S %Z}")
    st.sidebar.write(f"Videos: {len(dataset):,}")

    if dataset.is_empty:
        st.info("The export contains no videos; all metrics are zero.")

    render_kpis(dataset)

    tabs = st.tabs([
        "Overview",
        "Top Creators",
        "Temporal Analysis",
        "Correlations",
    ])

    with tabs[0]:
        render_overview(dataset)

    with tabs[1]:
        render_top_creators(dataset, config.top_creators)

    with tabs[2]:
        render_temporal(dataset)

    with tabs[3]:
        render_correlation(dataset)

    render_key_insights(dataset)


if __name__ == "__main__":
    main()
