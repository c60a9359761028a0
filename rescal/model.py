# rescal/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

# Caller-facing types (lightweight)
RawEvent = Dict[str, Any]
Resource = Dict[str, Any]
CalendarConfig = Dict[str, Any]

VIEWS: Tuple[str, ...] = ("day", "week", "month", "year")


@dataclass(frozen=True)
class CanonicalEvent:
    id: Optional[str]
    title: str
    start: Optional[dt.date]  # first day, inclusive; None when the input start is unusable
    end: Optional[dt.date]    # exclusive, always > start
    resource_id: Optional[str]
    color: Optional[str]

    raw: Mapping[str, Any] = field(hash=False)  # read-only copy of the input record

    @property
    def valid(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def days(self) -> int:
        if self.start is None or self.end is None:
            return 0
        return (self.end - self.start).days


def freeze_raw(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(raw))


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    start: dt.date
    end: dt.date  # exclusive
    days: Tuple[dt.date, ...]


@dataclass(frozen=True)
class PositionedEvent:
    event: CanonicalEvent
    start_column: int
    end_column: int  # exclusive
    row_index: int

    @property
    def span(self) -> int:
        return self.end_column - self.start_column


@dataclass(frozen=True)
class DragState:
    pointer_id: int
    event_id: str
    origin: CanonicalEvent
    start_x: float
    start_y: float
    delta_days: int
    target_resource_row: int


@dataclass(frozen=True)
class DragPreview:
    event_id: str
    row_index: int
    offset_px: float


__all__ = [
    "RawEvent",
    "Resource",
    "CalendarConfig",
    "VIEWS",
    "CanonicalEvent",
    "freeze_raw",
    "Section",
    "PositionedEvent",
    "DragState",
    "DragPreview",
]
