"""Altair chart builders for the dashboard tabs.

Builders only shape frames that ``metrics`` already computed; they never
aggregate on their own.
"""

from __future__ import annotations

import altair as alt
import pandas as pd

PALETTE = ["#8b5cf6", "#06b6d4", "#10b981", "#f59e0b", "#ef4444"]


def language_pie(languages: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(languages)
        .mark_arc(outerRadius=110)
        .encode(
            theta=alt.Theta("value:Q", stack=True),
            color=alt.Color("name:N", title="Language", scale=alt.Scale(range=PALETTE)),
            tooltip=[
                alt.Tooltip("name:N", title="Language"),
                alt.Tooltip("value:Q", title="Videos", format=",.0f"),
                alt.Tooltip("percentage:Q", title="Share (%)", format=".1f"),
            ],
        )
        .properties(height=300)
    )


def top_creators_bar(creators: pd.DataFrame) -> alt.Chart:
    # One bar group per video; the rank prefix keeps repeated authors apart.
    labelled = creators.assign(rank=range(1, len(creators) + 1))
    labelled["label"] = [f"{rank}. {name}" for rank, name in zip(labelled["rank"], labelled["name"])]
    return (
        alt.Chart(labelled)
        .transform_fold(["engagement", "followers"], as_=["metric", "value"])
        .mark_bar()
        .encode(
            x=alt.X(
                "label:N",
                sort=alt.EncodingSortField(field="rank", order="ascending"),
                title="Creator",
                axis=alt.Axis(labelAngle=-45),
            ),
            xOffset="metric:N",
            y=alt.Y("value:Q", title="Count"),
            color=alt.Color(
                "metric:N",
                title="",
                scale=alt.Scale(domain=["engagement", "followers"], range=PALETTE[:2]),
            ),
            tooltip=[
                alt.Tooltip("name:N", title="Creator"),
                alt.Tooltip("metric:N", title="Metric"),
                alt.Tooltip("value:Q", title="Value", format=",.0f"),
                alt.Tooltip("views:Q", title="Views", format=",.0f"),
            ],
        )
        .properties(height=400)
    )


def hourly_line(hourly: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(hourly)
        .mark_line(point=True, color=PALETTE[0], strokeWidth=3)
        .encode(
            x=alt.X("label:N", sort=alt.EncodingSortField(field="hour", order="ascending"), title="Hour"),
            y=alt.Y("avg_engagement:Q", title="Average Engagement"),
            tooltip=[
                alt.Tooltip("label:N", title="Hour"),
                alt.Tooltip("avg_engagement:Q", title="Average Engagement", format=",.0f"),
            ],
        )
        .properties(height=400)
    )


def correlation_scatter(points: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(points)
        .mark_circle(color=PALETTE[0], opacity=0.7)
        .encode(
            x=alt.X("views:Q", title="Views", axis=alt.Axis(format="~s")),
            y=alt.Y("engagement:Q", title="Engagement"),
            tooltip=[
                alt.Tooltip("views:Q", title="Views", format=",.0f"),
                alt.Tooltip("engagement:Q", title="Engagement", format=",.0f"),
                alt.Tooltip("followers:Q", title="Followers", format=",.0f"),
            ],
        )
        .properties(height=400)
        .interactive()
    )
