# rescal/util/dates.py
"""Calendar-day arithmetic.

Calendar days are `datetime.date` values. Datetimes are accepted anywhere a day
is expected; aware datetimes are bucketed into the calendar of `tz`.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import TypeVar, Union

from .tz import TzLike, local_datetime, midnight_epoch_ms, resolve_tz

DAY_MS = 24 * 60 * 60 * 1000

DateLike = Union[dt.date, dt.datetime]
D = TypeVar("D", dt.date, dt.datetime)


def js_round(x: float) -> int:
    # Half-up, so -0.5 -> 0 and 0.5 -> 1.
    return int(math.floor(x + 0.5))


def clamp(v: int, lo: int, hi: int) -> int:
    return min(hi, max(lo, v))


def start_of_day(d: DateLike, tz: TzLike = None) -> dt.date:
    if isinstance(d, dt.datetime):
        if d.tzinfo is None:
            return d.date()
        return local_datetime(d, resolve_tz(tz)).date()
    return d


def add_days(d: D, n: int) -> D:
    return d + dt.timedelta(days=int(n))


def _rollover(d: D, year: int, month: int) -> D:
    # Day-of-month overflow spills into the following month (Jan 31 + 1 month -> Mar 2/3).
    y = year + (month - 1) // 12
    m = (month - 1) % 12 + 1
    first = d.replace(year=y, month=m, day=1)
    return first + dt.timedelta(days=d.day - 1)


def add_months(d: D, n: int) -> D:
    return _rollover(d, d.year, d.month + int(n))


def add_years(d: D, n: int) -> D:
    return _rollover(d, d.year + int(n), d.month)


def diff_days(a: DateLike, b: DateLike, tz: TzLike = None) -> int:
    """Whole days between the local midnights of `a` and `b` (a - b).

    Computed on epoch milliseconds so a 23h or 25h day around a DST change is
    rounded back to one day.
    """
    tzinfo = resolve_tz(tz)
    ms = midnight_epoch_ms(start_of_day(a, tzinfo), tzinfo) - midnight_epoch_ms(start_of_day(b, tzinfo), tzinfo)
    return js_round(ms / DAY_MS)


def iter_days(start: dt.date, count: int) -> list[dt.date]:
    return [add_days(start, i) for i in range(max(0, int(count)))]
