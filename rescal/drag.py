# rescal/drag.py
"""Pointer-driven rescheduling.

One gesture at a time (Idle -> Dragging -> Idle). A gesture shifts an event by
whole days horizontally and moves it to another resource row vertically; on
release it yields a reschedule intent (an updated raw event) or nothing.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping, Optional, Sequence

from .grid import DEFAULT_ROW_HEIGHT, row_from_y
from .model import CanonicalEvent, DragState, RawEvent
from .projection import resource_index
from .util.console import obs_log
from .util.dates import add_days, js_round

RescheduleCallback = Callable[[RawEvent], Any]


def reschedule(origin: CanonicalEvent, delta_days: int, resource_id: str) -> RawEvent:
    """Updated raw record: canonical start/end shifted by `delta_days`, new resource.

    Unrelated raw fields, the caller's `id` value included, are carried over
    untouched.
    """
    updated: RawEvent = dict(origin.raw)
    updated.setdefault("id", origin.id)
    updated["start"] = add_days(origin.start, delta_days)
    updated["end"] = add_days(origin.end, delta_days)
    updated["resourceId"] = resource_id
    return updated


class DragController:
    def __init__(
        self,
        *,
        row_height: float = DEFAULT_ROW_HEIGHT,
        on_reschedule: Optional[RescheduleCallback] = None,
    ) -> None:
        self.row_height = float(row_height)
        self.on_reschedule = on_reschedule
        self._state: Optional[DragState] = None

    @property
    def state(self) -> Optional[DragState]:
        return self._state

    @property
    def dragging(self) -> bool:
        return self._state is not None

    def is_dragging(self, event_id: Optional[str]) -> bool:
        return self._state is not None and event_id is not None and self._state.event_id == event_id

    def _owns(self, pointer_id: int) -> bool:
        return self._state is not None and self._state.pointer_id == pointer_id

    def drag_start(
        self,
        pointer_id: int,
        event: CanonicalEvent,
        x: float,
        y: float,
        resources: Sequence[Mapping[str, Any]],
    ) -> bool:
        """Begin a gesture on `event`. Returns False when the press is ignored.

        Ignored when another gesture is active, when the event has no id or no
        usable start, or when its resource is not among `resources` (such
        events are never drawn).
        """
        if self._state is not None:
            return False
        if not event.id or not event.valid:
            return False
        if resource_index(resources, event.resource_id) < 0:
            return False

        self._state = DragState(
            pointer_id=pointer_id,
            event_id=event.id,
            origin=event,
            start_x=float(x),
            start_y=float(y),
            delta_days=0,
            target_resource_row=row_from_y(y, self.row_height, len(resources)),
        )
        return True

    def drag_move(self, pointer_id: int, x: float, y: float, cell_width: float, resource_count: int) -> bool:
        if not self._owns(pointer_id):
            return False
        st = self._state
        assert st is not None

        dx = float(x) - st.start_x
        delta_days = js_round(dx / cell_width) if cell_width > 0 else 0
        self._state = dataclasses.replace(
            st,
            delta_days=delta_days,
            target_resource_row=row_from_y(y, self.row_height, resource_count),
        )
        return True

    def drag_end(self, pointer_id: int, resources: Sequence[Mapping[str, Any]]) -> Optional[RawEvent]:
        """Finish the gesture; returns the reschedule intent or None when discarded."""
        if not self._owns(pointer_id):
            return None
        st = self._state
        assert st is not None
        self._state = None

        row = st.target_resource_row
        target = resources[row] if 0 <= row < len(resources) else None
        target_id = target.get("id") if isinstance(target, Mapping) else None
        if not target_id:
            obs_log("drag", "INFO", f"discarded drag event={st.event_id!r} row={row} resources={len(resources)}")
            return None

        updated = reschedule(st.origin, st.delta_days, str(target_id))
        if self.on_reschedule is not None:
            self.on_reschedule(updated)
        return updated

    def drag_cancel(self, pointer_id: int) -> bool:
        """Lost pointer capture: drop the gesture without emitting anything."""
        if not self._owns(pointer_id):
            return False
        obs_log("drag", "INFO", f"cancelled drag event={self._state.event_id!r}")  # type: ignore[union-attr]
        self._state = None
        return True


def apply_intent(events: Sequence[Mapping[str, Any]], updated: Mapping[str, Any]) -> list[RawEvent]:
    """Host-side merge of a reschedule intent into an event list.

    Matched on the raw `id` value as given by the caller (5 and "5" differ).
    """
    out: list[RawEvent] = []
    uid = updated.get("id")
    for e in events:
        if uid is not None and uid != "" and e.get("id") == uid:
            merged = dict(e)
            merged.update(updated)
            out.append(merged)
        else:
            out.append(dict(e))
    return out
