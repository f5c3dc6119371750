from __future__ import annotations

from typing import Any, Dict, List, Sequence

import altair as alt
import pandas as pd

from core.aggregate import METRIC_FIELDS, overall_average, yearly_average

alt.data_transformers.disable_max_rows()

METRIC_STYLES = {
    "intensity": {"label": "Intensity", "borderColor": "#8884d8", "backgroundColor": "rgba(136, 132, 216, 0.5)"},
    "likelihood": {"label": "Likelihood", "borderColor": "#82ca9d", "backgroundColor": "rgba(130, 202, 157, 0.5)"},
    "relevance": {"label": "Relevance", "borderColor": "#ffc658", "backgroundColor": "rgba(255, 198, 88, 0.5)"},
}

PIE_COLORS = [
    "#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF", "#FF9F40",
    "#FF5757", "#57C7B9", "#F9C74F", "#2A9D8F", "#E9C46A", "#F6BD60",
    "#E76F51", "#8ABF9E", "#F94144", "#F3722C", "#F8961E", "#F9C74F",
    "#90BE6D", "#577590", "#2C6E49", "#F3722C", "#A1C6EA", "#D9BF77",
]


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


# ---------------- Series (labels + datasets) ----------------
def line_series(records: pd.DataFrame) -> Dict[str, Any]:
    """Per-record intensity / likelihood / relevance against the published date."""
    labels = records["published_label"].tolist() if not records.empty else []
    datasets = []
    for field in METRIC_FIELDS:
        style = METRIC_STYLES[field]
        datasets.append(
            {
                "label": style["label"],
                "data": [float(v) for v in records[field].tolist()] if not records.empty else [],
                "borderColor": style["borderColor"],
                "backgroundColor": style["backgroundColor"],
                "fill": True,
            }
        )
    return {"labels": labels, "datasets": datasets}


def radar_series(records: pd.DataFrame) -> Dict[str, Any]:
    order = ["intensity", "relevance", "likelihood"]
    return {
        "labels": [METRIC_STYLES[f]["label"] for f in order],
        "datasets": [
            {
                "label": "Insights Overview",
                "data": [overall_average(records, f) for f in order],
                "backgroundColor": "rgba(255, 99, 132, 0.2)",
                "borderColor": "rgba(255, 99, 132, 1)",
                "borderWidth": 1,
            }
        ],
    }


def yearly_bar_series(records: pd.DataFrame) -> Dict[str, Any]:
    """Average intensity and relevance per year, over the whole (unfiltered) set."""
    intensity = yearly_average(records, "intensity")
    relevance = yearly_average(records, "relevance")
    return {
        "labels": list(intensity.keys()),
        "datasets": [
            {"label": "Average Intensity", "data": list(intensity.values()), "backgroundColor": "#8884d8"},
            {"label": "Average Relevance", "data": list(relevance.values()), "backgroundColor": "#ffc658"},
        ],
    }


def sector_bar_series(sector_rows: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "labels": [row["sector"] for row in sector_rows],
        "datasets": [
            {
                "label": METRIC_STYLES[field]["label"],
                "data": [row[field] for row in sector_rows],
                "backgroundColor": METRIC_STYLES[field]["borderColor"],
            }
            for field in METRIC_FIELDS
        ],
    }


def pie_series(region_rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{"name": row["region"], "value": row["count"]} for row in region_rows]


def series_to_frame(series: Dict[str, Any]) -> pd.DataFrame:
    """Long-form frame (position, label, dataset, value) for Altair."""
    rows = []
    for ds in series.get("datasets", []):
        for pos, (label, value) in enumerate(zip(series.get("labels", []), ds.get("data", []))):
            rows.append({"position": pos, "label": label, "dataset": ds["label"], "value": value})
    return pd.DataFrame(rows, columns=["position", "label", "dataset", "value"])


# ---------------- Altair charts ----------------
def area_chart(series: Dict[str, Any]) -> alt.Chart:
    df = series_to_frame(series)
    hover = alt.selection_point(fields=["dataset"], on="mouseover", empty="all")
    return (
        alt.Chart(df)
        .mark_area(opacity=0.5, line=True)
        .encode(
            x=alt.X("position:O", title="Date", axis=alt.Axis(labels=False, ticks=False, grid=False)),
            y=alt.Y("value:Q", title="Value", stack=None, axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("dataset:N", title="Metric"),
            opacity=alt.condition(hover, alt.value(0.6), alt.value(0.15)),
            tooltip=[
                alt.Tooltip("label:N", title="Date"),
                alt.Tooltip("dataset:N", title="Metric"),
                alt.Tooltip("value:Q", title="Value"),
            ],
        )
        .add_params(hover)
        .properties(height=300)
    )


def overview_chart(series: Dict[str, Any]) -> alt.Chart:
    # Radar stand-in: Vega-Lite has no polar line mark.
    df = series_to_frame(series)
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            y=alt.Y("label:N", title=None, sort=None),
            x=alt.X("value:Q", title="Average", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("label:N", legend=None),
            tooltip=[alt.Tooltip("label:N", title="Metric"), alt.Tooltip("value:Q", title="Average", format=".2f")],
        )
        .properties(height=160)
    )


def grouped_bar_chart(series: Dict[str, Any], *, x_title: str) -> alt.Chart:
    df = series_to_frame(series)
    hover = alt.selection_point(fields=["dataset"], on="mouseover", empty="all")
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("label:N", title=x_title, sort=None, axis=alt.Axis(grid=False)),
            xOffset="dataset:N",
            y=alt.Y("value:Q", title="Value", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("dataset:N", title="Metric"),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.5)),
            tooltip=[
                alt.Tooltip("label:N", title=x_title),
                alt.Tooltip("dataset:N", title="Metric"),
                alt.Tooltip("value:Q", title="Value", format=".2f"),
            ],
        )
        .add_params(hover)
        .properties(height=300)
    )


def pie_chart(slices: Sequence[Dict[str, Any]]) -> alt.Chart:
    df = pd.DataFrame(list(slices), columns=["name", "value"])
    return (
        alt.Chart(df)
        .mark_arc(outerRadius=110)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("name:N", title="Region", scale=alt.Scale(range=PIE_COLORS)),
            tooltip=[alt.Tooltip("name:N", title="Region"), alt.Tooltip("value:Q", title="Records")],
        )
        .properties(height=300)
    )
