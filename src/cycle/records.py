"""Domain records shared by the phase and prediction engines.

These are plain dataclasses, independent of the database rows and the API
schemas.  The record store converts rows into ``CycleRecord`` and
``Preferences``; the engines return ``PhaseInfo`` and ``CyclePrediction``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from src.cycle.config_loader import CycleEngineConfig


class CyclePhase(str, Enum):
    menstrual = "menstrual"
    follicular = "follicular"
    ovulation = "ovulation"
    luteal = "luteal"


@dataclass(frozen=True)
class CycleRecord:
    """A single logged period.

    Attributes:
        cycle_id:      Store identity (opaque to the engine).
        user_id:       Owning user identifier.
        start_date:    First day of the period.
        end_date:      Last day of the period; None while ongoing.
        cycle_length:  Days until the next period started, once known.
        period_length: Inclusive length of the period, once ``end_date`` is set.
    """

    start_date: date
    user_id: str = ""
    cycle_id: int | None = None
    end_date: date | None = None
    cycle_length: int | None = None
    period_length: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Preferences:
    """Per-user averages.  Reminder fields are only read by reminder planning."""

    average_cycle_length: int = 28
    average_period_length: int = 5
    reminder_days_before: int = 2
    notification_enabled: bool = True


@dataclass(frozen=True)
class PhaseInfo:
    phase: CyclePhase
    day_in_cycle: int
    days_until_next_period: int | None
    is_fertile_window: bool


@dataclass(frozen=True)
class CyclePrediction:
    next_period_date: date
    next_ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date


# ---------------------------------------------------------------------------
# Shared derivations
# ---------------------------------------------------------------------------


def to_calendar_day(value: date | datetime) -> date:
    """Strip the time of day.  Timezone info, if any, is ignored."""
    if isinstance(value, datetime):
        return value.date()
    return value


def most_recent_cycle(history: list[CycleRecord]) -> CycleRecord | None:
    """Return the record with the latest ``start_date``, or None.

    Input order does not matter.  Ties keep the first record seen.
    """
    latest: CycleRecord | None = None
    for record in history:
        if latest is None or to_calendar_day(record.start_date) > to_calendar_day(
            latest.start_date
        ):
            latest = record
    return latest


def resolve_averages(
    preferences: Preferences | None, config: CycleEngineConfig
) -> tuple[int, int]:
    """Return ``(average_cycle_length, average_period_length)``.

    Absent preferences, or non-positive values, fall back to the configured
    defaults.
    """
    defaults = config.defaults
    if preferences is None:
        return defaults.average_cycle_length, defaults.average_period_length
    cycle_length = preferences.average_cycle_length
    period_length = preferences.average_period_length
    if not cycle_length or cycle_length <= 0:
        cycle_length = defaults.average_cycle_length
    if not period_length or period_length <= 0:
        period_length = defaults.average_period_length
    return cycle_length, period_length


def effective_cycle_length(record: CycleRecord, average_cycle_length: int) -> int:
    """The record's measured cycle length, else the user's average."""
    if record.cycle_length and record.cycle_length > 0:
        return record.cycle_length
    return average_cycle_length


def period_length_days(start_date: date, end_date: date) -> int:
    """Inclusive period length: a period starting and ending the same day is 1."""
    return (to_calendar_day(end_date) - to_calendar_day(start_date)).days + 1


def cycle_length_days(start_date: date, next_start_date: date) -> int:
    """Days from one period start to the next."""
    return (to_calendar_day(next_start_date) - to_calendar_day(start_date)).days
