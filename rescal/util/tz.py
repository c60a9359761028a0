# rescal/util/tz.py
from __future__ import annotations

import datetime as dt
import os
import re
from typing import Optional, Union

from zoneinfo import ZoneInfo

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

TzLike = Union[str, dt.tzinfo, None]


def normalize_tz_name(name: Optional[str]) -> str:
    """Canonical cfg spelling: "local", "UTC", an IANA name or a fixed offset."""
    s = str(name).strip() if name is not None else ""
    if s.lower() in ("", "local", "system"):
        return "local"
    if s.lower() in ("utc", "z", "gmt"):
        return "UTC"
    return s


def default_tz_name() -> str:
    return normalize_tz_name(os.getenv("RESCAL_TZ", "local"))


def resolve_tz(name: TzLike) -> Optional[dt.tzinfo]:
    """tzinfo used to bucket instants into calendar days.

    "local" resolves to None: the system rules are applied per instant, so
    dates on either side of a DST change land on their own local day.
    """
    if isinstance(name, dt.tzinfo):
        return name

    tz_name = normalize_tz_name(name)
    if tz_name == "local":
        return None
    if tz_name == "UTC":
        return dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        if int(hh_s) > 23 or int(mm_s) > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        minutes = int(hh_s) * 60 + int(mm_s)
        return dt.timezone(dt.timedelta(minutes=minutes if sign_s == "+" else -minutes))

    try:
        return ZoneInfo(tz_name)
    except Exception as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def today_date(tz: Optional[dt.tzinfo]) -> dt.date:
    return dt.datetime.now(tz=tz).date()


def midnight_epoch_ms(d: dt.date, tz: Optional[dt.tzinfo]) -> int:
    # Naive (tz=None) midnights are read with the system rules for that date.
    midnight = dt.datetime(d.year, d.month, d.day, 0, 0, 0, tzinfo=tz)
    return int(midnight.timestamp() * 1000)


def local_datetime(value: dt.datetime, tz: Optional[dt.tzinfo]) -> dt.datetime:
    """Wall-clock view of `value` in `tz` (None = system local).

    Aware datetimes are converted; naive ones are read as wall-clock time in `tz`.
    """
    if value.tzinfo is None:
        return value if tz is None else value.replace(tzinfo=tz)
    return value.astimezone(tz)


def is_midnight(value: dt.datetime) -> bool:
    return value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0
