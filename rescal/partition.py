# rescal/partition.py
from __future__ import annotations

import calendar
import datetime as dt
from typing import List

from .model import VIEWS, Section
from .util.dates import DateLike, add_days, add_months, add_years, iter_days, start_of_day
from .util.tz import TzLike, resolve_tz, today_date


def _check_view(view: str) -> str:
    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view!r} (expected one of {', '.join(VIEWS)})")
    return view


def month_days(anchor: DateLike) -> List[dt.date]:
    d = start_of_day(anchor)
    last = calendar.monthrange(d.year, d.month)[1]
    return iter_days(dt.date(d.year, d.month, 1), last)


def week_days(anchor: DateLike) -> List[dt.date]:
    d = start_of_day(anchor)
    # date.weekday() is Monday=0 already; the (sunday_index + 6) % 7 shift is implicit.
    start = add_days(d, -d.weekday())
    return iter_days(start, 7)


def _short_label(d: dt.date) -> str:
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def _month_label(d: dt.date) -> str:
    return d.strftime("%B %Y")


def _section(days: List[dt.date], *, key: str, title: str) -> Section:
    start = days[0]
    return Section(key=key, title=title, start=start, end=add_days(days[-1], 1), days=tuple(days))


def _month_section(anchor: DateLike) -> Section:
    days = month_days(anchor)
    first = days[0]
    return _section(days, key=f"{first.year:04d}-{first.month:02d}", title=_month_label(first))


def partition(active_date: DateLike, view: str) -> List[Section]:
    """Split the view containing `active_date` into ordered, contiguous sections.

    day   -> one section of one day
    week  -> one section, Monday..Sunday of the ISO week
    month -> one section, 1st..last day of the month
    year  -> twelve month sections
    """
    _check_view(view)
    d = start_of_day(active_date)

    if view == "day":
        return [_section([d], key=d.isoformat(), title=_short_label(d))]

    if view == "week":
        days = week_days(d)
        return [_section(days, key=days[0].isoformat(), title=_short_label(days[0]))]

    if view == "month":
        return [_month_section(d)]

    return [_month_section(dt.date(d.year, m, 1)) for m in range(1, 13)]


def shift_by_view(d: DateLike, view: str, delta: int) -> DateLike:
    _check_view(view)
    if view == "day":
        return add_days(d, delta)
    if view == "week":
        return add_days(d, delta * 7)
    if view == "month":
        return add_months(d, delta)
    return add_years(d, delta)


def go_prev(d: DateLike, view: str) -> DateLike:
    return shift_by_view(d, view, -1)


def go_next(d: DateLike, view: str) -> DateLike:
    return shift_by_view(d, view, 1)


def go_today(tz: TzLike = None) -> dt.date:
    return today_date(resolve_tz(tz))


def view_title(active_date: DateLike, view: str) -> str:
    """Toolbar title: '2024' (year), 'January 2024' (month), 'Jan 10, 2024' (day/week)."""
    _check_view(view)
    d = start_of_day(active_date)
    if view == "year":
        return f"{d.year:04d}"
    if view == "month":
        return _month_label(d)
    return _short_label(d)


def day_header_label(day: dt.date) -> str:
    # "8 M": day of month plus weekday initial.
    return f"{day.day} {day.strftime('%a')[:1]}"
