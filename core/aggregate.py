"""Aggregation primitives over normalized insight records.

All functions take the DataFrame produced by `core.data.normalize_records`
and never modify it. Grouping keeps the order in which keys first appear in
the source data.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

import pandas as pd

from core.filters import ALL_SECTORS

METRIC_FIELDS = ["intensity", "likelihood", "relevance"]


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def mean(values: Iterable[object], *, empty: float = 0.0) -> float:
    """Arithmetic mean of `values`.

    Non-numeric entries are ignored. `empty` is the empty-group policy: it is
    returned whenever nothing is left to average, so callers never divide by
    zero or get NaN back.
    """
    series = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce").dropna()
    if series.empty:
        return float(empty)
    return float(series.mean())


def distinct_years(records: pd.DataFrame) -> List[str]:
    if records.empty or "published_year" not in records.columns:
        return []
    years = records["published_year"].astype(str)
    years = years[years != ""]
    return years.drop_duplicates().tolist()


def distinct_sectors(records: pd.DataFrame) -> List[str]:
    if records.empty or "sector" not in records.columns:
        return []
    return records["sector"].astype(str).drop_duplicates().tolist()


def filter_by_year(records: pd.DataFrame, year: Optional[str]) -> pd.DataFrame:
    if not year or records.empty:
        return records
    return records[records["published_year"].astype(str) == str(year)]


def filter_by_sector(records: pd.DataFrame, sector: Optional[str]) -> pd.DataFrame:
    if not sector or sector == ALL_SECTORS or records.empty:
        return records
    return records[records["sector"].astype(str) == str(sector)]


def overall_average(records: pd.DataFrame, field: str, *, empty: float = 0.0) -> float:
    if records.empty or field not in records.columns:
        return float(empty)
    return mean(records[field], empty=empty)


def group_average_by_sector(records: pd.DataFrame, *, ndigits: int = 2) -> List[Dict[str, object]]:
    """Mean intensity / likelihood / relevance per sector, rounded to `ndigits`."""
    if records.empty:
        return []
    rows: List[Dict[str, object]] = []
    for sector, group in records.groupby("sector", sort=False):
        row: Dict[str, object] = {"sector": str(sector)}
        for field in METRIC_FIELDS:
            row[field] = round_half_up(mean(group[field]), ndigits)
        rows.append(row)
    return rows


def region_distribution(records: pd.DataFrame) -> List[Dict[str, object]]:
    if records.empty:
        return []
    counts = records.groupby("region", sort=False).size()
    return [{"region": str(region), "count": int(count)} for region, count in counts.items()]


def yearly_average(records: pd.DataFrame, metric: str) -> Dict[str, float]:
    """Mean of `metric` for every year present in `records` (the unfiltered set)."""
    out: Dict[str, float] = {}
    for year in distinct_years(records):
        out[year] = overall_average(filter_by_year(records, year), metric)
    return out


def recent_records(records: pd.DataFrame, limit: int = 5) -> List[Dict[str, object]]:
    if records.empty:
        return []
    head = records.head(max(0, int(limit)))
    return [{"title": str(r["title"]), "added": str(r["added"])} for _, r in head.iterrows()]
