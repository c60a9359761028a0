# rescal/util/viewkey.py
from __future__ import annotations

import datetime as dt
from typing import Any


def _fold(h: int, raw: str) -> int:
    for ch in raw:
        h = (h * 131 + ord(ch)) & 0xFFFFFFFF
    return h


def _stable_repr(value: Any) -> str:
    if isinstance(value, dict):
        items = sorted((str(k), _stable_repr(v)) for k, v in value.items())
        return "{" + ",".join(f"{k}:{v}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_stable_repr(v) for v in value) + "]"
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return repr(value)


def content_key(value: Any) -> str:
    """Cheap deterministic hash of nested dict/list/date content."""
    return f"{_fold(0, _stable_repr(value)):08x}"


def make_view_key(
    active_date: dt.date,
    view: str,
    tz: str = "local",
    resources_key: str = "",
    events_key: str = "",
) -> str:
    """Return a stable view key used for caching and UI-state correlation.

    The view key is intentionally cheap and deterministic.
    It includes the timezone so changing bucketing does not accidentally
    reuse stale cached state.
    """
    raw = f"{active_date.isoformat()}|{view}|{tz}|{resources_key}|{events_key}"
    return f"{_fold(0, raw):08x}"
