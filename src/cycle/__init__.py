"""Cycle phase inference, prediction and calendar export.

All functions here are pure: the caller fetches history and preferences
from the record store and passes the reference day in explicitly.

Modules:
    records           : Domain dataclasses and shared derivations
    config_loader     : Load/validate/hot-reload cycle_config.yaml
    phase_engine      : Current phase, cycle day, countdown, fertility flag
    prediction_engine : Next period, ovulation and fertile window dates
    calendar_export   : iCalendar serialization of a prediction
    reminders         : Reminder target dates for a prediction
"""

from src.cycle.calendar_export import export_ics
from src.cycle.config_loader import CycleEngineConfig, get_cycle_config
from src.cycle.phase_engine import compute_phase
from src.cycle.prediction_engine import compute_prediction
from src.cycle.records import (
    CyclePhase,
    CyclePrediction,
    CycleRecord,
    PhaseInfo,
    Preferences,
)
from src.cycle.reminders import ReminderPlan, ReminderType, plan_reminders

__all__ = [
    "CycleEngineConfig",
    "CyclePhase",
    "CyclePrediction",
    "CycleRecord",
    "PhaseInfo",
    "Preferences",
    "ReminderPlan",
    "ReminderType",
    "compute_phase",
    "compute_prediction",
    "export_ics",
    "get_cycle_config",
    "plan_reminders",
]
