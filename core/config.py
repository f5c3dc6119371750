"""Centralised configuration for the insights dashboard.

Every value has a working local default and can be overridden from the
environment (or a `.env` file next to the project).
"""

from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Backend (FastAPI + MongoDB)
# ---------------------------------------------------------------------------
MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB: str = os.getenv("MONGODB_DB", "blackcofferDB")
# Mongoose pluralizes the `Data` model into the `datas` collection.
MONGODB_COLLECTION: str = os.getenv("MONGODB_COLLECTION", "datas")

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "3001"))
CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ---------------------------------------------------------------------------
# Front end data source
# ---------------------------------------------------------------------------
INSIGHTS_API_URL: str = os.getenv("INSIGHTS_API_URL", f"http://localhost:{API_PORT}/api/data")
INSIGHTS_API_TIMEOUT: float = float(os.getenv("INSIGHTS_API_TIMEOUT", "10"))

__all__ = [
    "MONGODB_URI",
    "MONGODB_DB",
    "MONGODB_COLLECTION",
    "API_HOST",
    "API_PORT",
    "CORS_ORIGINS",
    "INSIGHTS_API_URL",
    "INSIGHTS_API_TIMEOUT",
]
