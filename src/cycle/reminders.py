"""Reminder target dates derived from a cycle prediction.

Only computes *when* each reminder should fire.  Persisting and delivering
notifications is the job of whatever consumes these plans.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from src.cycle.config_loader import CycleEngineConfig, get_cycle_config
from src.cycle.records import CyclePrediction, Preferences, to_calendar_day


class ReminderType(str, Enum):
    period_start = "period_start"
    ovulation = "ovulation"
    pms = "pms"
    fertile_window = "fertile_window"


@dataclass(frozen=True)
class ReminderPlan:
    reminder_type: ReminderType
    scheduled_date: date
    event_date: date
    title: str
    message: str


def _days_phrase(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "in 1 day"
    return f"in {days} days"


def plan_reminders(
    prediction: CyclePrediction,
    preferences: Preferences | None,
    today: date | datetime,
    config: CycleEngineConfig | None = None,
) -> list[ReminderPlan]:
    """Return the reminders to schedule for one predicted cycle.

    Each reminder fires ``reminder_days_before`` days ahead of its event.
    Reminders whose fire date has already passed are dropped, and nothing is
    planned when notifications are disabled.

    Returns:
        Plans sorted by scheduled date, then by type.
    """
    cfg = config or get_cycle_config()
    today = to_calendar_day(today)

    if preferences is None:
        lead_days = cfg.defaults.reminder_days_before
    elif not preferences.notification_enabled:
        return []
    else:
        lead_days = max(0, preferences.reminder_days_before)

    events = [
        (
            ReminderType.period_start,
            prediction.next_period_date,
            "Period expected",
            "Your period is expected {when}.",
        ),
        (
            ReminderType.ovulation,
            prediction.next_ovulation_date,
            "Ovulation expected",
            "Ovulation is expected {when}.",
        ),
        (
            ReminderType.fertile_window,
            prediction.fertile_window_start,
            "Fertile window",
            "Your fertile window starts {when}.",
        ),
        (
            ReminderType.pms,
            prediction.next_period_date - timedelta(days=cfg.pms_days_before_period),
            "PMS may start",
            "Premenstrual symptoms may start {when}.",
        ),
    ]

    plans: list[ReminderPlan] = []
    for reminder_type, event_date, title, template in events:
        scheduled = event_date - timedelta(days=lead_days)
        if scheduled < today:
            continue
        plans.append(
            ReminderPlan(
                reminder_type=reminder_type,
                scheduled_date=scheduled,
                event_date=event_date,
                title=title,
                message=template.format(when=_days_phrase(lead_days)),
            )
        )

    plans.sort(key=lambda p: (p.scheduled_date, p.reminder_type.value))
    return plans
