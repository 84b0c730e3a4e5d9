"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Callable

from fastapi import Depends, Path

from src.config import Settings, get_settings

Clock = Callable[[], datetime]


def _utc_clock() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Clock:
    """Return the wall clock used by request handlers.

    Handlers read ``now`` once and pass it down, so the engines never touch
    the system clock.  Tests override this dependency with a fixed instant.
    """
    return _utc_clock


# Annotated shortcuts for route signatures
UserId = Annotated[str, Path(min_length=1, max_length=128)]
AppClock = Annotated[Clock, Depends(get_clock)]
AppSettings = Annotated[Settings, Depends(get_settings)]
