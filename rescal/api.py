"""rescal.api

Stable *library* entrypoint for rescal.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from rescal.config import default_config, load_config
from rescal.drag import DragController, apply_intent, reschedule
from rescal.grid import compute_cell_width, row_from_y
from rescal.model import (
    VIEWS,
    CanonicalEvent,
    DragPreview,
    DragState,
    PositionedEvent,
    Section,
)
from rescal.normalize import normalize, normalize_event, normalize_events
from rescal.partition import (
    day_header_label,
    go_next,
    go_prev,
    go_today,
    month_days,
    partition,
    shift_by_view,
    view_title,
    week_days,
)
from rescal.payload import build_view_payload, dumps_payload
from rescal.projection import drag_preview, project, resource_index
from rescal.util.dates import add_days, add_months, add_years, diff_days, start_of_day
from rescal.validate import EventValidationError, assert_valid_events, validate_events, validate_resources
from rescal.viewmodel import CalendarViewModel

on_resize = compute_cell_width

__all__ = [
    # date arithmetic
    "start_of_day",
    "add_days",
    "add_months",
    "add_years",
    "diff_days",
    # partitioning + navigation
    "VIEWS",
    "Section",
    "partition",
    "month_days",
    "week_days",
    "shift_by_view",
    "go_prev",
    "go_next",
    "go_today",
    "view_title",
    "day_header_label",
    # normalization
    "CanonicalEvent",
    "normalize",
    "normalize_event",
    "normalize_events",
    # projection
    "PositionedEvent",
    "project",
    "resource_index",
    "drag_preview",
    "DragPreview",
    # grid metrics
    "compute_cell_width",
    "on_resize",
    "row_from_y",
    # drag
    "DragState",
    "DragController",
    "reschedule",
    "apply_intent",
    # view model + payload
    "CalendarViewModel",
    "build_view_payload",
    "dumps_payload",
    # config + validation
    "default_config",
    "load_config",
    "EventValidationError",
    "validate_events",
    "validate_resources",
    "assert_valid_events",
]
