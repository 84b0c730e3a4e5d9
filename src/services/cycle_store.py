"""Record store reads used by the cycle engines.

Converts ``cycle_entries`` and ``user_preferences`` rows into the engine's
domain records.  Missing preferences resolve to the configured defaults
without creating a row.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from src.cycle.config_loader import CycleEngineConfig, get_cycle_config
from src.cycle.records import CycleRecord, Preferences
from src.services.database import fetchrow

logger = logging.getLogger("cycletrack.store")


def record_from_row(row: Mapping[str, Any]) -> CycleRecord:
    return CycleRecord(
        cycle_id=row["id"],
        user_id=row["user_id"],
        start_date=row["start_date"],
        end_date=row.get("end_date"),
        cycle_length=row.get("cycle_length"),
        period_length=row.get("period_length"),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def preferences_from_row(row: Mapping[str, Any]) -> Preferences:
    return Preferences(
        average_cycle_length=row["average_cycle_length"],
        average_period_length=row["average_period_length"],
        reminder_days_before=row["reminder_days_before"],
        notification_enabled=row["notification_enabled"],
    )


async def fetch_most_recent_cycle(user_id: str) -> CycleRecord | None:
    """Return the user's cycle with the latest start date, if any."""
    row = await fetchrow(
        """
        SELECT * FROM cycle_entries
        WHERE user_id = $1
        ORDER BY start_date DESC, id DESC
        LIMIT 1
        """,
        user_id,
    )
    return record_from_row(dict(row)) if row else None


async def fetch_preferences(user_id: str) -> Preferences | None:
    row = await fetchrow(
        "SELECT * FROM user_preferences WHERE user_id = $1",
        user_id,
    )
    if row is None:
        logger.debug("No stored preferences for user %s; engine defaults apply", user_id)
        return None
    return preferences_from_row(dict(row))


async def get_or_default_preferences(
    user_id: str, config: CycleEngineConfig | None = None
) -> Preferences:
    """Stored preferences, else the configured defaults.  Never writes."""
    stored = await fetch_preferences(user_id)
    if stored is not None:
        return stored
    defaults = (config or get_cycle_config()).defaults
    return Preferences(
        average_cycle_length=defaults.average_cycle_length,
        average_period_length=defaults.average_period_length,
        reminder_days_before=defaults.reminder_days_before,
    )
