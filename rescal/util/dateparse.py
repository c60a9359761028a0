# rescal/util/dateparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Optional

from .tz import local_datetime

COMPACT_UTC_RE = re.compile(r"^(\d{8})T(\d{6})Z$")  # e.g. 20240110T083000Z
_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def _parse_compact_utc(m: re.Match) -> Optional[dt.datetime]:
    ymd = m.group(1)
    hms = m.group(2)
    try:
        return dt.datetime(
            int(ymd[0:4]),
            int(ymd[4:6]),
            int(ymd[6:8]),
            int(hms[0:2]),
            int(hms[2:4]),
            int(hms[4:6]),
            tzinfo=dt.timezone.utc,
        )
    except ValueError:
        return None


def parse_datetime_text(s: str) -> Optional[dt.datetime]:
    """Parse ISO-8601 text (date or datetime, optional Z/offset) or compact UTC.

    A bare date parses to its midnight. Returns None when the text is not a date.
    """
    ss = str(s or "").strip()
    if not ss:
        return None

    m = COMPACT_UTC_RE.match(ss)
    if m:
        return _parse_compact_utc(m)

    if _DATE_ONLY_RE.match(ss):
        try:
            d = parse_date_yyyy_mm_dd(ss)
        except ValueError:
            return None
        return dt.datetime(d.year, d.month, d.day)

    try:
        return dt.datetime.fromisoformat(ss.replace("Z", "+00:00"))
    except ValueError:
        return None


def coerce_datetime(value: Any, tz: Optional[dt.tzinfo]) -> Optional[dt.datetime]:
    """Coerce an event date input into a datetime on the wall clock of `tz`.

    Accepts datetime.datetime, datetime.date (midnight), epoch milliseconds
    and text. Returns None for anything unparseable.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, dt.datetime):
        return local_datetime(value, tz)

    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day, tzinfo=tz)

    if isinstance(value, (int, float)):
        try:
            return dt.datetime.fromtimestamp(float(value) / 1000.0, tz=tz)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        parsed = parse_datetime_text(value)
        if parsed is None:
            return None
        return local_datetime(parsed, tz)

    return None
