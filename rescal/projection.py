# rescal/projection.py
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from .model import CanonicalEvent, DragPreview, DragState, PositionedEvent, Section
from .util.dates import diff_days
from .util.tz import TzLike, resolve_tz


def resource_index(resources: Sequence[Mapping[str, object]], resource_id: Optional[str]) -> int:
    if not resource_id:
        return -1
    for i, r in enumerate(resources):
        if isinstance(r, Mapping) and r.get("id") == resource_id:
            return i
    return -1


def project(
    section: Section,
    resources: Sequence[Mapping[str, object]],
    events: Iterable[CanonicalEvent],
    tz: TzLike = None,
) -> List[PositionedEvent]:
    """Map canonical events onto the (day column, resource row) grid of `section`.

    Intersection is open on both ends: an event ending exactly at section.start
    or starting exactly at section.end is not visible. Spans are clipped to the
    section and are at least one column wide. Events without a usable start,
    or whose resource is absent or unknown, are dropped. Output follows input
    order.
    """
    tzinfo = resolve_tz(tz)
    rows = {}
    for i, r in enumerate(resources):
        if isinstance(r, Mapping) and r.get("id") is not None:
            rows.setdefault(r.get("id"), i)

    out: List[PositionedEvent] = []
    for ev in events:
        if not ev.resource_id or ev.start is None or ev.end is None:
            continue
        if not (ev.end > section.start and ev.start < section.end):
            continue

        row = rows.get(ev.resource_id, -1)
        if row < 0:
            continue

        clipped_start = max(ev.start, section.start)
        clipped_end = min(ev.end, section.end)

        start_col = diff_days(clipped_start, section.start, tzinfo)
        end_col = max(start_col + 1, diff_days(clipped_end, section.start, tzinfo))

        out.append(PositionedEvent(event=ev, start_column=start_col, end_column=end_col, row_index=row))
    return out


def drag_preview(
    positioned: Iterable[PositionedEvent],
    state: Optional[DragState],
    cell_width: float,
) -> Optional[DragPreview]:
    """Where the event being dragged should be drawn: target row plus x offset."""
    if state is None:
        return None
    for p in positioned:
        if p.event.id == state.event_id:
            return DragPreview(
                event_id=state.event_id,
                row_index=state.target_resource_row,
                offset_px=float(state.delta_days) * float(cell_width),
            )
    return None
