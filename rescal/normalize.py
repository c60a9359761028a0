# rescal/normalize.py
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from .model import CanonicalEvent, freeze_raw
from .util.console import obs_log
from .util.dateparse import coerce_datetime
from .util.dates import add_days
from .util.tz import TzLike, is_midnight, resolve_tz


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v)
    return s if s else None


def normalize_event(raw: Mapping[str, Any], tz: TzLike = None) -> CanonicalEvent:
    """Canonical half-open day range for one raw event.

    start: floored to its calendar day
           missing/unparseable -> start=end=None (never visible, never draggable)
    end:   missing/unparseable -> start + 1 day
           non-midnight time   -> rounded up to the next midnight
           <= start            -> start + 1 day
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"event must be a mapping; got {type(raw).__name__}")

    tzinfo = resolve_tz(tz)
    ev_id = _opt_str(raw.get("id"))
    title = str(raw.get("title") or "")
    resource_id = _opt_str(raw.get("resourceId"))
    color = _opt_str(raw.get("color"))

    start_dt = coerce_datetime(raw.get("start"), tzinfo)
    if start_dt is None:
        obs_log("normalize", "WARN", f"invalid start date id={ev_id!r} value={raw.get('start')!r}; event hidden")
        return CanonicalEvent(
            id=ev_id, title=title, start=None, end=None, resource_id=resource_id, color=color, raw=freeze_raw(raw)
        )
    start = start_dt.date()

    end_raw = raw.get("end")
    end_dt = coerce_datetime(end_raw, tzinfo) if end_raw is not None else None
    if end_raw is not None and end_dt is None:
        obs_log("normalize", "WARN", f"invalid end date id={ev_id!r} value={end_raw!r}; using one day")

    if end_dt is None:
        end = add_days(start, 1)
    else:
        end = end_dt.date()
        if not is_midnight(end_dt):
            end = add_days(end, 1)

    if end <= start:
        end = add_days(start, 1)

    return CanonicalEvent(
        id=ev_id,
        title=title,
        start=start,
        end=end,
        resource_id=resource_id,
        color=color,
        raw=freeze_raw(raw),
    )


def normalize_events(events: Iterable[Mapping[str, Any]], tz: TzLike = None) -> List[CanonicalEvent]:
    """1:1, order-preserving normalization. Visibility is decided later by projection."""
    tzinfo = resolve_tz(tz)
    return [normalize_event(e, tzinfo) for e in events]


normalize = normalize_events
