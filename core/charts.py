from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, List

import altair as alt
import pandas as pd

if TYPE_CHECKING:
    from core.metrics_chart import ChartData

alt.data_transformers.disable_max_rows()

CHART_TITLE = "Test Metrics Overview"
CHART_HEIGHT = 600


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def tick_label(label: str) -> str:
    """Weekly labels ("Jan Week 1") show only the week number on the axis."""
    parts = label.split(" ")
    if "Week" in label and len(parts) > 2:
        return parts[2]
    return label


def tick_label_expr(labels: List[str]) -> str:
    # x is encoded on row position, so repeated Month labels stay separate bands.
    return f"{json.dumps([tick_label(label) for label in labels])}[datum.value]"


def chart_frame(chart_data: ChartData) -> pd.DataFrame:
    rows = []
    for series in chart_data.series:
        for position, (label, value) in enumerate(zip(chart_data.labels, series.data)):
            rows.append(
                {
                    "position": position,
                    "label": label,
                    "metric": series.label,
                    "value": value,
                    "tooltip": f"{series.label}: {value:g}",
                }
            )
    return pd.DataFrame(rows, columns=["position", "label", "metric", "value", "tooltip"])


def build_metrics_chart(chart_data: ChartData) -> alt.Chart:
    metrics = [s.label for s in chart_data.series]
    colors = [s.color for s in chart_data.series]
    return (
        alt.Chart(
            chart_frame(chart_data),
            title=alt.TitleParams(CHART_TITLE, fontSize=20, fontWeight="bold", offset=20),
        )
        .mark_bar()
        .encode(
            x=alt.X(
                "position:O",
                title="Month",
                scale=alt.Scale(paddingInner=0.2),
                axis=alt.Axis(
                    labelAngle=0,
                    labelExpr=tick_label_expr(chart_data.labels),
                    titleFontSize=14,
                    titleFontWeight="bold",
                ),
            ),
            xOffset=alt.XOffset("metric:N", sort=metrics, scale=alt.Scale(paddingInner=0.5)),
            y=alt.Y(
                "value:Q",
                title="Count",
                stack=None,
                scale=alt.Scale(domainMin=-0.5),
                axis=alt.Axis(format="d", tickMinStep=1, titleFontSize=14, titleFontWeight="bold"),
            ),
            color=alt.Color(
                "metric:N",
                title=None,
                sort=metrics,
                scale=alt.Scale(domain=metrics, range=colors),
                legend=alt.Legend(orient="right", symbolType="circle", labelFontSize=12, rowPadding=10),
            ),
            tooltip=[alt.Tooltip("label:N", title="Month"), alt.Tooltip("tooltip:N", title="Value")],
        )
        .properties(height=CHART_HEIGHT)
    )
