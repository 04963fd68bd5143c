# dashboard/charts.py
import math
from typing import Any, Dict, List

import altair as alt
import pandas as pd

ChartRows = List[Dict[str, Any]]


def progress_rows(pie_chart: ChartRows) -> ChartRows:
    """Copy of the pie series with an integer ``percentage`` per slice."""
    total = sum(item["value"] for item in pie_chart)
    return [
        {**item, "percentage": math.floor(item["value"] * 100 / total + 0.5) if total else 0}
        for item in pie_chart
    ]


def progress_donut(pie_chart: ChartRows) -> alt.Chart:
    frame = pd.DataFrame(progress_rows(pie_chart))
    return (
        alt.Chart(frame)
        .mark_arc(innerRadius=60, outerRadius=100, padAngle=0.02)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color(
                "name:N",
                scale=alt.Scale(domain=list(frame["name"]), range=list(frame["color"])),
                legend=alt.Legend(title=None, orient="bottom"),
            ),
            tooltip=[
                alt.Tooltip("name:N", title="Status"),
                alt.Tooltip("value:Q", title="Tasks"),
                alt.Tooltip("percentage:Q", title="%"),
            ],
        )
    )


def priority_bar(bar_chart: ChartRows) -> alt.Chart:
    frame = pd.DataFrame(bar_chart)
    return (
        alt.Chart(frame)
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("name:N", sort=list(frame["name"]), title="Priority"),
            y=alt.Y("value:Q", title="Tasks", axis=alt.Axis(tickMinStep=1)),
            color=alt.Color(
                "name:N",
                scale=alt.Scale(domain=list(frame["name"]), range=list(frame["color"])),
                legend=None,
            ),
            tooltip=[alt.Tooltip("name:N", title="Priority"), alt.Tooltip("value:Q", title="Tasks")],
        )
    )
