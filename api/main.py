from __future__ import annotations

import logging
import math
import random
from typing import Any, Callable, Dict

import numpy as np
import pandas as pd
from bson import ObjectId
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import core.logging_config  # noqa: F401
from api.schemas import DashboardFiltersModel, ErrorResponse
from core.config import API_HOST, API_PORT, CORS_ORIGINS
from core.data import fetch_documents, load_dashboard_data, prepare_context
from core.filters import DashboardFilters, normalize_filters
from core.metrics_insights import compute_insights
from core.metrics_overview import compute_overview
from core.metrics_trends import compute_trends


app = FastAPI(title="Insights Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {500: {"model": ErrorResponse}}

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy/bson objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                ObjectId: str,
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": str(exc)})


def _page(model: DashboardFiltersModel, compute: Callable[[DashboardFilters, Dict[str, Any]], Dict[str, Any]]) -> JSONResponse:
    data_ctx = load_dashboard_data(fetch_documents())
    rng = random.Random(model.seed) if model.seed is not None else None
    f = normalize_filters(model.model_dump(), available_years=data_ctx.get("years", []), rng=rng)
    ctx = prepare_context(f, data_ctx)
    return _json(compute(f, ctx))


@app.get("/api/data", responses=ERROR_RESPONSES)
def api_data():
    try:
        return _json(fetch_documents())
    except Exception as exc:
        logger.exception("api_data failed")
        return _error(exc)


@app.post("/api/overview", responses=ERROR_RESPONSES)
def overview(filters: DashboardFiltersModel):
    try:
        return _page(filters, compute_overview)
    except Exception as exc:
        logger.exception("overview failed")
        return _error(exc)


@app.post("/api/trends", responses=ERROR_RESPONSES)
def trends(filters: DashboardFiltersModel):
    try:
        return _page(filters, compute_trends)
    except Exception as exc:
        logger.exception("trends failed")
        return _error(exc)


@app.post("/api/insights", responses=ERROR_RESPONSES)
def insights(filters: DashboardFiltersModel):
    try:
        return _page(filters, compute_insights)
    except Exception as exc:
        logger.exception("insights failed")
        return _error(exc)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT)
