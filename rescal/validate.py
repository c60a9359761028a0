"""Strict, opt-in validation for raw events and resources (library-facing)."""

from __future__ import annotations

import datetime as dt
from typing import Any, List

from .util.dateparse import coerce_datetime


class EventValidationError(ValueError):
    """Raised when raw events or resources fail validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_resources(resources: Any) -> List[str]:
    """Return human-readable error strings (empty means OK)."""
    errs: List[str] = []
    if not isinstance(resources, (list, tuple)):
        return [f"resources must be list (got {type(resources).__name__})"]

    seen: set[str] = set()
    for i, r in enumerate(resources):
        if not isinstance(r, dict):
            errs.append(f"resources[{i}] must be dict")
            continue
        rid = r.get("id")
        _require(isinstance(rid, str) and bool(rid.strip()), f"resources[{i}].id must be non-empty string", errs)
        _require(isinstance(r.get("title"), str), f"resources[{i}].title must be string", errs)
        if isinstance(rid, str) and rid:
            if rid in seen:
                errs.append(f"resources[{i}].id duplicate: {rid!r}")
            seen.add(rid)
    return errs


def validate_events(events: Any) -> List[str]:
    """Return human-readable error strings (empty means OK).

    Normalization never fails on a bad `end`; strict callers reject it here.
    """
    errs: List[str] = []
    if not isinstance(events, (list, tuple)):
        return [f"events must be list (got {type(events).__name__})"]

    # Parse-only check; the timezone has no effect on parseability.
    tz = dt.timezone.utc
    seen: set[str] = set()
    for i, e in enumerate(events):
        if not isinstance(e, dict):
            errs.append(f"events[{i}] must be dict")
            continue

        _require(isinstance(e.get("title"), str), f"events[{i}].title must be string", errs)

        eid = e.get("id")
        if eid is not None:
            if not isinstance(eid, str) or not eid:
                errs.append(f"events[{i}].id must be non-empty string when present")
            elif eid in seen:
                errs.append(f"events[{i}].id duplicate: {eid!r}")
            else:
                seen.add(eid)

        start = coerce_datetime(e.get("start"), tz)
        _require(start is not None, f"events[{i}].start must be a date, datetime or parseable string", errs)

        if e.get("end") is not None:
            end = coerce_datetime(e.get("end"), tz)
            if end is None:
                errs.append(f"events[{i}].end must be a date, datetime or parseable string")
            elif start is not None and end < start:
                errs.append(f"events[{i}].end is before start")

        for k in ("resourceId", "color"):
            v = e.get(k)
            _require(v is None or isinstance(v, str), f"events[{i}].{k} must be string when present", errs)
    return errs


def assert_valid_events(events: Any, resources: Any = None) -> None:
    errs = validate_events(events)
    if resources is not None:
        errs += validate_resources(resources)
    if errs:
        raise EventValidationError("; ".join(errs[:20]))
