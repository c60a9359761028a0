# rescal/grid.py
from __future__ import annotations

import math

from .util.dates import clamp

DEFAULT_ROW_HEIGHT = 40
DEFAULT_RESOURCE_COL_WIDTH = 240
FALLBACK_CELL_WIDTH = 40.0
MIN_CELL_WIDTH = 5.0


def compute_cell_width(
    viewport_width: float,
    day_count: int,
    *,
    resource_col_width: float = 0,
    fallback: float = FALLBACK_CELL_WIDTH,
    min_width: float = MIN_CELL_WIDTH,
) -> float:
    """Per-day pixel width of the grid body; call on every viewport resize.

    A collapsed viewport (width at or below `min_width`, or no days) yields
    `fallback` so pixel -> day conversion never divides by ~0.
    """
    try:
        width = max(0.0, float(viewport_width) - float(resource_col_width))
    except (TypeError, ValueError):
        return float(fallback)
    if day_count <= 0:
        return float(fallback)
    w = width / int(day_count)
    if not math.isfinite(w) or w <= min_width:
        return float(fallback)
    return w


def row_from_y(y: float, row_height: float, resource_count: int) -> int:
    """Resource row under a body-relative pointer Y, clamped to [0, count-1]."""
    if row_height <= 0:
        return 0
    return clamp(int(math.floor(float(y) / float(row_height))), 0, max(0, int(resource_count) - 1))
