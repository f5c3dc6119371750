from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from core.aggregate import recent_records
from core.filters import DashboardFilters


def compute_trends(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    records: pd.DataFrame = ctx.get("records", pd.DataFrame())
    return {
        "filters": asdict(filters),
        "recent": recent_records(records, limit=filters.recent_limit),
    }
