from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class DashboardFiltersModel(BaseModel):
    selected_year: Optional[str] = None
    selected_sector: str = "All"
    recent_limit: int = 5
    # Seed for the initial-year draw when `selected_year` is empty.
    seed: Optional[int] = None


class ErrorResponse(BaseModel):
    message: str
