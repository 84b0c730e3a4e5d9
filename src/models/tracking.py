"""Pydantic models for cycle entries, daily tracking, preferences,
notifications, and the engine outputs returned by the insights endpoints."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import Field, model_validator

from src.cycle.config_loader import (
    CYCLE_LENGTH_RANGE,
    PERIOD_LENGTH_RANGE,
    REMINDER_DAYS_RANGE,
)
from src.cycle.records import CyclePhase
from src.cycle.reminders import ReminderType
from src.models.base import TimestampMixin, TrackerBase


# ---------- Enums ----------

class FlowIntensity(str, Enum):
    none = "none"
    light = "light"
    medium = "medium"
    heavy = "heavy"


class Mood(str, Enum):
    great = "great"
    good = "good"
    okay = "okay"
    bad = "bad"
    terrible = "terrible"


# ---------- Cycle Entries ----------

class CycleEntryCreate(TrackerBase):
    start_date: date
    end_date: date | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> CycleEntryCreate:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class CycleEntryUpdate(TrackerBase):
    end_date: date | None = None
    notes: str | None = None


class CycleEntryRead(TrackerBase, TimestampMixin):
    id: int
    user_id: str
    start_date: date
    end_date: date | None = None
    cycle_length: int | None = None
    period_length: int | None = None
    notes: str | None = None


# ---------- Daily Tracking ----------

class DailyTrackingCreate(TrackerBase):
    tracking_date: date
    flow_intensity: FlowIntensity | None = None
    symptoms: list[str] | None = None
    mood: Mood | None = None
    notes: str | None = None


class DailyTrackingRead(DailyTrackingCreate, TimestampMixin):
    id: int
    user_id: str


# ---------- Preferences ----------

class PreferencesUpdate(TrackerBase):
    average_cycle_length: int | None = Field(
        default=None, ge=CYCLE_LENGTH_RANGE[0], le=CYCLE_LENGTH_RANGE[1]
    )
    average_period_length: int | None = Field(
        default=None, ge=PERIOD_LENGTH_RANGE[0], le=PERIOD_LENGTH_RANGE[1]
    )
    reminder_days_before: int | None = Field(
        default=None, ge=REMINDER_DAYS_RANGE[0], le=REMINDER_DAYS_RANGE[1]
    )
    notification_enabled: bool | None = None


class PreferencesRead(TrackerBase, TimestampMixin):
    id: int
    user_id: str
    average_cycle_length: int = 28
    average_period_length: int = 5
    reminder_days_before: int = 2
    notification_enabled: bool = True


# ---------- Notifications ----------

class NotificationRead(TrackerBase):
    id: int
    user_id: str
    type: ReminderType
    title: str
    message: str
    scheduled_date: datetime
    is_sent: bool = False
    created_at: datetime


# ---------- Engine outputs ----------

class PhaseInfoRead(TrackerBase):
    phase: CyclePhase
    day_in_cycle: int = Field(ge=1)
    days_until_next_period: int | None = Field(default=None, ge=0)
    is_fertile_window: bool


class CyclePredictionRead(TrackerBase):
    next_period_date: date
    next_ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date


class ReminderPlanRead(TrackerBase):
    reminder_type: ReminderType
    scheduled_date: date
    event_date: date
    title: str
    message: str
