from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import requests
from pymongo import MongoClient
from pymongo.collection import Collection

from core.aggregate import distinct_sectors, distinct_years, filter_by_sector, filter_by_year
from core.config import (
    INSIGHTS_API_TIMEOUT,
    INSIGHTS_API_URL,
    MONGODB_COLLECTION,
    MONGODB_DB,
    MONGODB_URI,
)
from core.filters import DashboardFilters, normalize_filters

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = ["intensity", "likelihood", "relevance"]
TEXT_COLUMNS = ["title", "sector", "region", "topic", "country", "published", "added"]

# Fields that may be missing on a record and the value they take when absent.
OPTIONAL_NUMERIC_DEFAULTS = {"likelihood": 0.0}


def parse_published(series: pd.Series) -> pd.Series:
    """Parse `published` strings of mixed formats; unparseable values become NaT."""
    cleaned = series.astype("string").str.strip().replace({"": pd.NA})
    return pd.to_datetime(cleaned, errors="coerce", format="mixed", utc=True)


def format_date_label(value: object) -> str:
    if value is None or pd.isna(value):
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def normalize_records(docs: Iterable[Dict[str, Any]] | pd.DataFrame) -> pd.DataFrame:
    """Turn raw documents into the canonical record frame.

    Source order is kept. Missing optional numerics are defaulted here, once,
    so aggregations never need to. Two derived columns are added:
    `published_year` (string, "" when the date cannot be parsed) and
    `published_label` (M/D/YYYY, "" when unparseable).
    """
    df = docs.copy() if isinstance(docs, pd.DataFrame) else pd.DataFrame(list(docs))
    df = df.reset_index(drop=True)

    for col in NUMERIC_COLUMNS:
        if col not in df.columns:
            df[col] = float("nan")
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    for col, default in OPTIONAL_NUMERIC_DEFAULTS.items():
        df[col] = df[col].fillna(default)

    for col in TEXT_COLUMNS:
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].apply(lambda v: "" if v is None or (not isinstance(v, str) and pd.isna(v)) else str(v))

    parsed = parse_published(df["published"]) if not df.empty else pd.Series(dtype="datetime64[ns, UTC]")
    df["published_year"] = [str(int(d.year)) if pd.notna(d) else "" for d in parsed]
    df["published_label"] = [format_date_label(d) for d in parsed]
    return df


# ---------------- Sources ----------------
def fetch_records(
    url: str = INSIGHTS_API_URL,
    *,
    timeout: float = INSIGHTS_API_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """GET the full record array from the dashboard backend.

    Failures are logged and yield an empty list; nothing is retried.
    """
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError):
        logger.exception("Error fetching insights from %s", url)
        return []
    if not isinstance(payload, list):
        logger.error("Expected a JSON array from %s, got %s", url, type(payload).__name__)
        return []
    logger.info("Loaded %d insight records from %s", len(payload), url)
    return payload


_client: MongoClient | None = None


def get_mongo_client() -> MongoClient:
    """Return a singleton :class:`pymongo.MongoClient`."""
    global _client
    if _client is None:
        _client = MongoClient(MONGODB_URI)
    return _client


def get_collection() -> Collection:
    return get_mongo_client()[MONGODB_DB][MONGODB_COLLECTION]


def fetch_documents(collection: Optional[Collection] = None) -> List[Dict[str, Any]]:
    """Return every document of the insights collection, in natural order."""
    coll = collection if collection is not None else get_collection()
    return list(coll.find())


# ---------------- Public API (Streamlit + FastAPI use) ----------------
def load_dashboard_data(
    records: Optional[Iterable[Dict[str, Any]]] = None,
    *,
    url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Dict[str, object]:
    if records is None:
        records = fetch_records(url or INSIGHTS_API_URL, session=session)
    df = normalize_records(records)
    return {
        "records": df,
        "years": distinct_years(df),
        "sectors": distinct_sectors(df),
    }


def prepare_context(
    filters: dict | DashboardFilters,
    data_ctx: Dict[str, object],
    *,
    rng: Optional[Any] = None,
) -> Dict[str, object]:
    records: pd.DataFrame = data_ctx.get("records", pd.DataFrame())
    if not isinstance(records, pd.DataFrame) or records.columns.empty:
        records = normalize_records([])
    available_years = data_ctx.get("years") or distinct_years(records)
    filt = filters if isinstance(filters, DashboardFilters) else normalize_filters(filters, available_years=available_years, rng=rng)

    return {
        "filters": filt,
        "records": records,
        "years": list(available_years),
        "sectors": data_ctx.get("sectors") or distinct_sectors(records),
        "year_records": filter_by_year(records, filt.selected_year),
        "sector_records": filter_by_sector(records, filt.selected_sector),
    }
