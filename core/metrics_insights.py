from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from core.charts import (
    area_chart,
    grouped_bar_chart,
    line_series,
    overview_chart,
    radar_series,
    to_vega_spec,
    yearly_bar_series,
)
from core.filters import DashboardFilters


def compute_insights(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    """Year-filtered line/area and radar series plus the all-years bar series."""
    records: pd.DataFrame = ctx.get("records", pd.DataFrame())
    year_df: pd.DataFrame = ctx.get("year_records", records)

    line = line_series(year_df)
    radar = radar_series(year_df)
    bars = yearly_bar_series(records)

    charts: Dict[str, Any] = {}
    if not year_df.empty:
        charts["area"] = to_vega_spec(area_chart(line))
        charts["radar"] = to_vega_spec(overview_chart(radar))
    if bars["labels"]:
        charts["yearly_bar"] = to_vega_spec(grouped_bar_chart(bars, x_title="Year"))

    return {
        "filters": asdict(filters),
        "years": list(ctx.get("years", [])),
        "selected_year": filters.selected_year,
        "record_count": int(len(year_df)),
        "series": {"line": line, "radar": radar, "bar": bars},
        "charts": charts,
    }
