"""Read-only access to scheduled notifications."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from src.dependencies import AppClock, UserId
from src.models.tracking import NotificationRead
from src.services.database import fetch

router = APIRouter(prefix="/users/{user_id}/notifications", tags=["notifications"])


@router.get("/upcoming", response_model=list[NotificationRead])
async def list_upcoming(user_id: UserId, clock: AppClock) -> Any:
    """Unsent notifications scheduled from now on, soonest first."""
    rows = await fetch(
        """
        SELECT * FROM notifications
        WHERE user_id = $1 AND is_sent = FALSE AND scheduled_date >= $2
        ORDER BY scheduled_date ASC
        """,
        user_id, clock(),
    )
    return [dict(r) for r in rows]
