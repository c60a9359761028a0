"""rescal Python package.

Public API:
  - import from `rescal.api` (preferred) or `import rescal` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

from .api import (
    CalendarViewModel,
    DragController,
    normalize_events,
    partition,
    project,
)
