# rescal/viewmodel.py
from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .config import load_config
from .drag import DragController, RescheduleCallback
from .grid import compute_cell_width
from .model import VIEWS, CalendarConfig, CanonicalEvent, DragPreview, PositionedEvent, RawEvent, Resource, Section
from .normalize import normalize_events
from .partition import go_next, go_prev, go_today, month_days, partition, view_title
from .projection import drag_preview, project
from .util.console import obs_log
from .util.dateparse import coerce_datetime
from .util.dates import start_of_day
from .util.tz import resolve_tz
from .util.viewkey import content_key, make_view_key

DateInput = Union[dt.date, dt.datetime, str, int, None]


class _Memo:
    """Small bounded cache; insertion-ordered eviction. size=0 disables caching."""

    def __init__(self, size: int) -> None:
        self.size = int(size)
        self._data: Dict[Tuple[Any, ...], Any] = {}
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: Tuple[Any, ...], fn: Callable[[], Any]) -> Any:
        if key in self._data:
            self.hits += 1
            return self._data[key]
        self.misses += 1
        value = fn()
        if self.size <= 0:
            return value
        if len(self._data) >= self.size:
            self._data.pop(next(iter(self._data)))
        self._data[key] = value
        return value

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class CalendarViewModel:
    """State the host renderer drives: inputs, active date/view, metrics, drag.

    Every derived value is recomputed from pure functions; results are cached
    by content key, so replacing an input with equal content reuses the cache.
    """

    def __init__(
        self,
        resources: Iterable[Resource] = (),
        events: Iterable[RawEvent] = (),
        *,
        active_date: DateInput = None,
        view: Optional[str] = None,
        config: Optional[Mapping[str, Any]] = None,
        on_reschedule: Optional[RescheduleCallback] = None,
    ) -> None:
        self.cfg: CalendarConfig = load_config(config)
        self.tzinfo = resolve_tz(self.cfg["tz"])
        self._memo = _Memo(self.cfg["cache_size"])

        self.resources: List[Resource] = []
        self.events: List[RawEvent] = []
        self._resources_key = ""
        self._events_key = ""
        self.set_resources(resources)
        self.set_events(events)

        self.view = self.cfg["default_view"]
        if view is not None:
            self.set_view(view)
        self.active_date = go_today(self.tzinfo)
        if active_date is not None:
            self.set_active_date(active_date)

        self.cell_width = float(self.cfg["fallback_cell_width"])
        self.drag = DragController(row_height=self.cfg["row_height"], on_reschedule=on_reschedule)

    # --- inputs ---------------------------------------------------------------

    def set_resources(self, resources: Iterable[Resource]) -> None:
        self.resources = list(resources)
        self._resources_key = content_key(self.resources)

    def set_events(self, events: Iterable[RawEvent]) -> None:
        self.events = list(events)
        self._events_key = content_key(self.events)

    def set_view(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view!r} (expected one of {', '.join(VIEWS)})")
        self.view = view

    def set_active_date(self, value: DateInput) -> None:
        if isinstance(value, (dt.date, dt.datetime)):
            self.active_date = start_of_day(value, self.tzinfo)
            return
        parsed = coerce_datetime(value, self.tzinfo)
        if parsed is None:
            raise ValueError(f"Invalid active date: {value!r}")
        self.active_date = parsed.date()

    def clear_cache(self) -> None:
        obs_log("viewmodel", "INFO", f"cache cleared entries={len(self._memo)}")
        self._memo.clear()

    # --- navigation -----------------------------------------------------------

    def go_prev(self) -> dt.date:
        self.active_date = go_prev(self.active_date, self.view)
        return self.active_date

    def go_next(self) -> dt.date:
        self.active_date = go_next(self.active_date, self.view)
        return self.active_date

    def go_today(self) -> dt.date:
        self.active_date = go_today(self.tzinfo)
        return self.active_date

    @property
    def title(self) -> str:
        return view_title(self.active_date, self.view)

    @property
    def view_key(self) -> str:
        return make_view_key(
            self.active_date,
            self.view,
            tz=str(self.cfg["tz"]),
            resources_key=self._resources_key,
            events_key=self._events_key,
        )

    # --- derived --------------------------------------------------------------

    @property
    def sections(self) -> List[Section]:
        key = ("sections", self.active_date, self.view)
        return self._memo.get_or_compute(key, lambda: partition(self.active_date, self.view))

    @property
    def normalized_events(self) -> List[CanonicalEvent]:
        key = ("events", self._events_key, str(self.cfg["tz"]))
        return self._memo.get_or_compute(key, lambda: normalize_events(self.events, self.tzinfo))

    def positioned(self, section: Section) -> List[PositionedEvent]:
        key = ("positioned", section.key, section.start, self._resources_key, self._events_key, str(self.cfg["tz"]))
        return self._memo.get_or_compute(
            key,
            lambda: project(section, self.resources, self.normalized_events, self.tzinfo),
        )

    def visible(self) -> List[Tuple[Section, List[PositionedEvent]]]:
        return [(s, self.positioned(s)) for s in self.sections]

    def find_event(self, event_id: str) -> Optional[CanonicalEvent]:
        for ev in self.normalized_events:
            if ev.id == event_id:
                return ev
        return None

    # --- metrics --------------------------------------------------------------

    def grid_day_count(self) -> int:
        # Year view sizes its cells from the month of the active date.
        if self.view == "year":
            return len(month_days(self.active_date))
        return len(self.sections[0].days)

    def on_resize(self, viewport_width: float) -> float:
        self.cell_width = compute_cell_width(
            viewport_width,
            self.grid_day_count(),
            resource_col_width=self.cfg["resource_col_width"],
            fallback=self.cfg["fallback_cell_width"],
            min_width=self.cfg["min_cell_width"],
        )
        return self.cell_width

    # --- pointer gestures -----------------------------------------------------

    def pointer_down(self, pointer_id: int, event: Union[CanonicalEvent, str, int], x: float, y: float) -> bool:
        ev = event if isinstance(event, CanonicalEvent) else self.find_event(str(event))
        if ev is None:
            return False
        return self.drag.drag_start(pointer_id, ev, x, y, self.resources)

    def pointer_move(self, pointer_id: int, x: float, y: float) -> bool:
        return self.drag.drag_move(pointer_id, x, y, self.cell_width, len(self.resources))

    def pointer_up(self, pointer_id: int) -> Optional[RawEvent]:
        return self.drag.drag_end(pointer_id, self.resources)

    def pointer_cancel(self, pointer_id: int) -> bool:
        return self.drag.drag_cancel(pointer_id)

    def preview(self, section: Section) -> Optional[DragPreview]:
        return drag_preview(self.positioned(section), self.drag.state, self.cell_width)
