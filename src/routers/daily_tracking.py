"""Endpoints for daily flow, symptom and mood tracking."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Query

from src.dependencies import UserId
from src.models.tracking import DailyTrackingCreate, DailyTrackingRead
from src.services.database import fetch, fetchrow

router = APIRouter(prefix="/users/{user_id}/daily-tracking", tags=["daily tracking"])


@router.get("", response_model=list[DailyTrackingRead])
async def list_entries(
    user_id: UserId,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    limit: int = Query(default=90, ge=1, le=366),
) -> Any:
    conditions = ["user_id = $1"]
    params: list[Any] = [user_id]
    idx = 2

    if start_date:
        conditions.append(f"tracking_date >= ${idx}")
        params.append(start_date)
        idx += 1
    if end_date:
        conditions.append(f"tracking_date <= ${idx}")
        params.append(end_date)
        idx += 1

    where = " AND ".join(conditions)
    rows = await fetch(
        f"SELECT * FROM daily_tracking WHERE {where} ORDER BY tracking_date DESC LIMIT ${idx}",
        *params, limit,
    )
    return [dict(r) for r in rows]


@router.post("", response_model=DailyTrackingRead, status_code=201)
async def record_day(user_id: UserId, body: DailyTrackingCreate) -> Any:
    """Create the day's entry, or replace it if one already exists."""
    row = await fetchrow(
        """
        INSERT INTO daily_tracking (
            user_id, tracking_date, flow_intensity, symptoms, mood, notes
        ) VALUES ($1, $2, $3, $4, $5, $6)
        ON CONFLICT (user_id, tracking_date) DO UPDATE SET
            flow_intensity = EXCLUDED.flow_intensity,
            symptoms = EXCLUDED.symptoms,
            mood = EXCLUDED.mood,
            notes = EXCLUDED.notes,
            updated_at = NOW()
        RETURNING *
        """,
        user_id,
        body.tracking_date,
        body.flow_intensity.value if body.flow_intensity else None,
        body.symptoms,
        body.mood.value if body.mood else None,
        body.notes,
    )
    return dict(row)
