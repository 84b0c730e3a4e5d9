"""Phase, prediction, reminder and calendar endpoints.

Each handler reads the clock once, loads history and preferences from the
store, and hands everything to the pure cycle engines.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Response

from src.cycle.calendar_export import export_ics
from src.cycle.phase_engine import compute_phase
from src.cycle.prediction_engine import compute_prediction
from src.cycle.records import CycleRecord, Preferences
from src.cycle.reminders import plan_reminders
from src.dependencies import AppClock, AppSettings, UserId
from src.models.tracking import (
    CyclePredictionRead,
    PhaseInfoRead,
    ReminderPlanRead,
)
from src.services.cycle_store import fetch_most_recent_cycle, get_or_default_preferences

router = APIRouter(prefix="/users/{user_id}", tags=["insights"])
logger = logging.getLogger("cycletrack.routers.insights")


async def _load_inputs(user_id: str) -> tuple[list[CycleRecord], Preferences]:
    latest = await fetch_most_recent_cycle(user_id)
    preferences = await get_or_default_preferences(user_id)
    return ([latest] if latest else []), preferences


@router.get("/phase", response_model=PhaseInfoRead)
async def get_current_phase(user_id: UserId, clock: AppClock) -> Any:
    history, preferences = await _load_inputs(user_id)
    return compute_phase(history, preferences, clock())


@router.get("/predictions", response_model=CyclePredictionRead)
async def get_predictions(user_id: UserId, clock: AppClock) -> Any:
    history, preferences = await _load_inputs(user_id)
    return compute_prediction(history, preferences, clock())


@router.get("/reminders", response_model=list[ReminderPlanRead])
async def get_reminders(user_id: UserId, clock: AppClock) -> Any:
    """Reminder dates for the next predicted cycle."""
    now = clock()
    history, preferences = await _load_inputs(user_id)
    prediction = compute_prediction(history, preferences, now)
    return plan_reminders(prediction, preferences, now)


@router.get("/calendar.ics", response_class=Response)
async def get_calendar(user_id: UserId, clock: AppClock, settings: AppSettings) -> Response:
    now = clock()
    history, preferences = await _load_inputs(user_id)
    prediction = compute_prediction(history, preferences, now)
    body = export_ics(prediction, user_id, now)
    logger.info(
        "Exported calendar for user %s (next period %s)",
        user_id, prediction.next_period_date,
    )
    return Response(
        content=body,
        media_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.calendar_filename}"'
        },
    )
