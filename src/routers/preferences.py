"""Per-user cycle preferences."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from src.cycle.config_loader import get_cycle_config
from src.dependencies import UserId
from src.models.tracking import PreferencesRead, PreferencesUpdate
from src.services.database import fetchrow

router = APIRouter(prefix="/users/{user_id}/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesRead)
async def get_preferences(user_id: UserId) -> Any:
    """Return the user's preferences, creating the default row on first read."""
    defaults = get_cycle_config().defaults
    row = await fetchrow(
        """
        INSERT INTO user_preferences (
            user_id, average_cycle_length, average_period_length,
            reminder_days_before, notification_enabled
        ) VALUES ($1, $2, $3, $4, TRUE)
        ON CONFLICT (user_id) DO UPDATE SET user_id = EXCLUDED.user_id
        RETURNING *
        """,
        user_id,
        defaults.average_cycle_length,
        defaults.average_period_length,
        defaults.reminder_days_before,
    )
    return dict(row)


@router.patch("", response_model=PreferencesRead)
async def update_preferences(user_id: UserId, body: PreferencesUpdate) -> Any:
    """Update the given fields; missing preferences are created with defaults first."""
    defaults = get_cycle_config().defaults
    updates = body.model_dump(exclude_unset=True, exclude_none=True)

    values = {
        "average_cycle_length": defaults.average_cycle_length,
        "average_period_length": defaults.average_period_length,
        "reminder_days_before": defaults.reminder_days_before,
        "notification_enabled": True,
        **updates,
    }
    set_clauses = [f"{key} = EXCLUDED.{key}" for key in updates]
    set_clauses.append("updated_at = NOW()")

    row = await fetchrow(
        f"""
        INSERT INTO user_preferences (
            user_id, average_cycle_length, average_period_length,
            reminder_days_before, notification_enabled
        ) VALUES ($1, $2, $3, $4, $5)
        ON CONFLICT (user_id) DO UPDATE SET {', '.join(set_clauses)}
        RETURNING *
        """,
        user_id,
        values["average_cycle_length"],
        values["average_period_length"],
        values["reminder_days_before"],
        values["notification_enabled"],
    )
    return dict(row)
