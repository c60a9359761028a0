# rescal/config.py
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from .grid import DEFAULT_RESOURCE_COL_WIDTH, DEFAULT_ROW_HEIGHT, FALLBACK_CELL_WIDTH, MIN_CELL_WIDTH
from .model import VIEWS, CalendarConfig
from .util.tz import default_tz_name, normalize_tz_name


def _default_view() -> str:
    v = (os.getenv("RESCAL_DEFAULT_VIEW", "month") or "").strip().lower()
    return v if v in VIEWS else "month"


def default_config() -> CalendarConfig:
    return {
        "tz": default_tz_name(),
        "row_height": DEFAULT_ROW_HEIGHT,
        "resource_col_width": DEFAULT_RESOURCE_COL_WIDTH,
        "min_cell_width": MIN_CELL_WIDTH,
        "fallback_cell_width": FALLBACK_CELL_WIDTH,
        "default_view": _default_view(),
        "cache_size": 32,
    }


def _num(v: Any, default: float, *, minimum: float = 0.0) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return default
    return float(v) if v >= minimum else default


def load_config(overrides: Optional[Mapping[str, Any]] = None) -> CalendarConfig:
    """Defaults + overrides. Wrong-typed or out-of-range values fall back to defaults."""
    cfg: Dict[str, Any] = default_config()
    ov = dict(overrides or {})

    if "tz" in ov:
        cfg["tz"] = normalize_tz_name(ov.get("tz"))

    cfg["row_height"] = _num(ov.get("row_height"), cfg["row_height"], minimum=1)
    cfg["resource_col_width"] = _num(ov.get("resource_col_width"), cfg["resource_col_width"])
    cfg["min_cell_width"] = _num(ov.get("min_cell_width"), cfg["min_cell_width"])
    cfg["fallback_cell_width"] = _num(ov.get("fallback_cell_width"), cfg["fallback_cell_width"], minimum=1)

    view = ov.get("default_view")
    if isinstance(view, str) and view.strip().lower() in VIEWS:
        cfg["default_view"] = view.strip().lower()

    size = ov.get("cache_size")
    if isinstance(size, int) and not isinstance(size, bool) and size >= 0:
        cfg["cache_size"] = size

    return cfg
