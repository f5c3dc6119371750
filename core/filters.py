from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Optional, Sequence

ALL_SECTORS = "All"


@dataclass(frozen=True)
class DashboardFilters:
    selected_year: Optional[str] = None
    selected_sector: str = ALL_SECTORS
    recent_limit: int = 5


def _as_year(value: object) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    # Years typed as floats (e.g. 2017.0) still compare equal to "2017".
    try:
        as_float = float(s)
    except ValueError:
        return s
    if as_float.is_integer():
        return str(int(as_float))
    return s


def pick_initial_year(years: Sequence[str], rng: Optional[Any] = None) -> Optional[str]:
    """Pick the year that seeds the year filter after a load.

    `rng` is any object with a `choice()` method (e.g. `random.Random(seed)`);
    the module-level `random` is used when none is given.
    """
    if not years:
        return None
    source = rng if rng is not None else random
    return str(source.choice(list(years)))


def normalize_filters(
    raw: dict,
    *,
    available_years: Optional[Sequence[str]] = None,
    rng: Optional[Any] = None,
) -> DashboardFilters:
    selected_year = _as_year(raw.get("selected_year"))
    if selected_year is None:
        selected_year = pick_initial_year(list(available_years or []), rng=rng)

    selected_sector = str(raw.get("selected_sector") or ALL_SECTORS).strip() or ALL_SECTORS

    recent_limit = raw.get("recent_limit", 5)
    try:
        recent_limit = int(recent_limit)
    except (TypeError, ValueError):
        recent_limit = 5
    recent_limit = max(1, min(50, recent_limit))

    return DashboardFilters(
        selected_year=selected_year,
        selected_sector=selected_sector,
        recent_limit=recent_limit,
    )
