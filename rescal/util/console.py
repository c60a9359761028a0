from __future__ import annotations
import os
import sys
from typing import Any

def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def obs_enabled() -> bool:
    v = (os.getenv("RESCAL_OBS_LOG", "") or "").strip().lower()
    return v in {"1", "true", "yes", "on"}


def obs_log(scope: str, level: str, msg: str) -> None:
    """Write a `[rescal.<scope>] LEVEL: msg` line to stderr when RESCAL_OBS_LOG is on."""
    if not obs_enabled():
        return
    eprint(f"[rescal.{scope}] {level}: {msg}")
