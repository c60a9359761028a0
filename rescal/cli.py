from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, List

from .model import VIEWS
from .payload import build_view_payload, dumps_payload
from .util.dateparse import parse_date_yyyy_mm_dd
from .util.tz import resolve_tz
from .validate import validate_events, validate_resources
from .viewmodel import CalendarViewModel


def _die(msg: str, rc: int = 2) -> int:
    print(f"[rescal] ERROR: {msg}", file=sys.stderr)
    return rc


def _load_json_list(path: Path, label: str) -> List[Any]:
    obj = json.loads(path.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, dict) and isinstance(obj.get(label), list):
        obj = obj[label]
    if not isinstance(obj, list):
        raise ValueError(f"{label} JSON must be a list (or an object with a {label!r} list); got {type(obj).__name__}")
    return obj


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="rescal",
        description="Build the resource-calendar view payload (sections + positioned events) as JSON.",
    )
    ap.add_argument("--events", required=True, help="Events JSON path (list of raw events)")
    ap.add_argument("--resources", required=True, help="Resources JSON path (list of {id, title})")
    ap.add_argument("--date", default=None, help="Active date YYYY-MM-DD (default: today in --tz)")
    ap.add_argument(
        "--view",
        default=os.getenv("RESCAL_DEFAULT_VIEW", "month"),
        choices=list(VIEWS),
        help="View granularity (default: env RESCAL_DEFAULT_VIEW or 'month')",
    )
    ap.add_argument("--width", type=float, default=None, help="Viewport width in pixels (computes cell width)")
    ap.add_argument("--row-height", type=int, default=None, help="Resource row height in pixels (default: 40)")
    ap.add_argument(
        "--tz",
        default=os.getenv("RESCAL_TZ", "local"),
        help="Bucketing timezone for day boundaries (default: env RESCAL_TZ or 'local')",
    )
    ap.add_argument("--strict", action="store_true", help="Validate events/resources and fail on errors")
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")
    ns = ap.parse_args(argv)

    try:
        resolve_tz(ns.tz)
    except ValueError as e:
        return _die(f"Invalid --tz value: {e}")

    paths = {"events": Path(ns.events), "resources": Path(ns.resources)}
    loaded = {}
    for label, p in paths.items():
        if not p.exists():
            return _die(f"Missing input JSON: {p}")
        try:
            loaded[label] = _load_json_list(p, label)
        except Exception as e:
            return _die(f"Failed to load JSON: {p} ({e})")

    if ns.strict:
        errs = validate_resources(loaded["resources"]) + validate_events(loaded["events"])
        if errs:
            return _die("Invalid input: " + "; ".join(errs[:10]), rc=3)

    overrides: dict[str, Any] = {"tz": ns.tz}
    if ns.row_height is not None:
        overrides["row_height"] = ns.row_height

    try:
        active = parse_date_yyyy_mm_dd(ns.date) if ns.date else None
    except ValueError:
        return _die(f"Invalid --date value: {ns.date!r} (expected YYYY-MM-DD)")

    vm = CalendarViewModel(
        loaded["resources"],
        loaded["events"],
        active_date=active,
        view=ns.view,
        config=overrides,
    )
    if ns.width is not None:
        vm.on_resize(ns.width)

    try:
        text = dumps_payload(build_view_payload(vm))
    except TypeError as e:
        return _die(f"Invalid event: {e}", rc=3)

    if ns.out:
        out = Path(ns.out).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8", newline="\n")
        print(f"[rescal] OK: {out}", file=sys.stderr)
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
