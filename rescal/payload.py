# rescal/payload.py
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List, Optional

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

from .model import PositionedEvent, Section
from .partition import day_header_label
from .viewmodel import CalendarViewModel

PAYLOAD_SCHEMA_VERSION = 1


def _iso(v: Any) -> Any:
    if isinstance(v, (dt.date, dt.datetime)):
        return v.isoformat()
    raise TypeError(f"Object of type {type(v).__name__} is not JSON serializable")


def _event_out(p: PositionedEvent) -> Dict[str, Any]:
    ev = p.event
    return {
        "id": ev.id,
        "title": ev.title,
        "start": ev.start.isoformat(),
        "end": ev.end.isoformat(),
        "resource_id": ev.resource_id,
        "color": ev.color,
        "start_column": p.start_column,
        "end_column": p.end_column,
        "span": p.span,
        "row_index": p.row_index,
    }


def _section_out(vm: CalendarViewModel, section: Section) -> Dict[str, Any]:
    positioned = vm.positioned(section)
    positioned = sorted(positioned, key=lambda p: (p.row_index, p.start_column, p.end_column))
    return {
        "key": section.key,
        "title": section.title,
        "start": section.start.isoformat(),
        "end": section.end.isoformat(),
        "days": [{"date": d.isoformat(), "label": day_header_label(d)} for d in section.days],
        "events": [_event_out(p) for p in positioned],
    }


def _drag_out(vm: CalendarViewModel) -> Optional[Dict[str, Any]]:
    st = vm.drag.state
    if st is None:
        return None
    preview = None
    for section in vm.sections:
        preview = vm.preview(section)
        if preview is not None:
            break
    return {
        "pointer_id": st.pointer_id,
        "event_id": st.event_id,
        "delta_days": st.delta_days,
        "target_resource_row": st.target_resource_row,
        "offset_px": preview.offset_px if preview is not None else None,
    }


def build_view_payload(vm: CalendarViewModel, *, generated_at: Optional[str] = None) -> Dict[str, Any]:
    """JSON-ready snapshot of everything a renderer needs for the current view."""
    cfg = vm.cfg
    sections: List[Dict[str, Any]] = [_section_out(vm, s) for s in vm.sections]
    return {
        "schema_version": PAYLOAD_SCHEMA_VERSION,
        "meta": {
            "generated_at": generated_at or dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
            "view_key": vm.view_key,
        },
        "cfg": {
            "tz": cfg["tz"],
            "row_height": cfg["row_height"],
            "resource_col_width": cfg["resource_col_width"],
            "cell_width": vm.cell_width,
        },
        "title": vm.title,
        "view": vm.view,
        "active_date": vm.active_date.isoformat(),
        "resources": [{"id": r.get("id"), "title": r.get("title")} for r in vm.resources if isinstance(r, dict)],
        "sections": sections,
        "drag": _drag_out(vm),
    }


def dumps_payload(payload: Dict[str, Any]) -> str:
    if not isinstance(payload, dict):
        raise TypeError(f"payload must be dict, got {type(payload).__name__}")

    if orjson is not None:
        return orjson.dumps(payload, default=_iso).decode("utf-8")
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=_iso)
