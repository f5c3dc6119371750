from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from core.aggregate import METRIC_FIELDS, group_average_by_sector, overall_average, region_distribution, round_half_up
from core.charts import grouped_bar_chart, pie_chart, pie_series, sector_bar_series, to_vega_spec
from core.filters import DashboardFilters


def compute_overview(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    records: pd.DataFrame = ctx.get("records", pd.DataFrame())
    sector_df: pd.DataFrame = ctx.get("sector_records", records)

    kpis = {f"avg_{field}": round_half_up(overall_average(sector_df, field), 2) for field in METRIC_FIELDS}

    sector_rows = group_average_by_sector(sector_df)
    sector_bars = sector_bar_series(sector_rows)
    # Region split is always over the full set, independent of the sector picker.
    regions = pie_series(region_distribution(records))

    charts: Dict[str, Any] = {}
    if sector_rows:
        charts["sector_comparison"] = to_vega_spec(grouped_bar_chart(sector_bars, x_title="Sector"))
    if regions:
        charts["regional_distribution"] = to_vega_spec(pie_chart(regions))

    return {
        "filters": asdict(filters),
        "sectors": list(ctx.get("sectors", [])),
        "record_count": int(len(sector_df)),
        "kpis": kpis,
        "sector_comparison": sector_rows,
        "series": {"sector_bar": sector_bars, "region_pie": regions},
        "charts": charts,
    }
