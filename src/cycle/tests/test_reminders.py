"""Tests for reminder date planning."""

from __future__ import annotations

from datetime import date

from src.cycle.config_loader import CycleEngineConfig
from src.cycle.records import CyclePrediction, Preferences
from src.cycle.reminders import ReminderType, plan_reminders
from src.cycle.tests.conftest import TEST_DATE


class TestPlanReminders:
    def test_default_lead_time(
        self, cycle_config: CycleEngineConfig, sample_prediction: CyclePrediction
    ) -> None:
        plans = plan_reminders(sample_prediction, None, TEST_DATE, cycle_config)
        assert [(p.reminder_type, p.scheduled_date) for p in plans] == [
            (ReminderType.fertile_window, date(2026, 3, 2)),
            (ReminderType.ovulation, date(2026, 3, 7)),
            (ReminderType.pms, date(2026, 3, 16)),
            (ReminderType.period_start, date(2026, 3, 21)),
        ]

    def test_event_dates_kept(
        self, cycle_config: CycleEngineConfig, sample_prediction: CyclePrediction
    ) -> None:
        plans = plan_reminders(sample_prediction, None, TEST_DATE, cycle_config)
        by_type = {p.reminder_type: p.event_date for p in plans}
        assert by_type[ReminderType.period_start] == sample_prediction.next_period_date
        assert by_type[ReminderType.pms] == date(2026, 3, 18)

    def test_disabled_notifications(
        self, cycle_config: CycleEngineConfig, sample_prediction: CyclePrediction
    ) -> None:
        prefs = Preferences(notification_enabled=False)
        assert plan_reminders(sample_prediction, prefs, TEST_DATE, cycle_config) == []

    def test_past_reminders_dropped(
        self, cycle_config: CycleEngineConfig, sample_prediction: CyclePrediction
    ) -> None:
        plans = plan_reminders(sample_prediction, None, date(2026, 3, 8), cycle_config)
        assert [p.reminder_type for p in plans] == [
            ReminderType.pms,
            ReminderType.period_start,
        ]

    def test_same_day_reminders(
        self, cycle_config: CycleEngineConfig, sample_prediction: CyclePrediction
    ) -> None:
        prefs = Preferences(reminder_days_before=0)
        plans = plan_reminders(sample_prediction, prefs, TEST_DATE, cycle_config)
        assert all(p.scheduled_date == p.event_date for p in plans)
        assert plans[-1].message == "Your period is expected today."

    def test_message_mentions_lead_time(
        self, cycle_config: CycleEngineConfig, sample_prediction: CyclePrediction
    ) -> None:
        prefs = Preferences(reminder_days_before=3)
        plans = plan_reminders(sample_prediction, prefs, TEST_DATE, cycle_config)
        ovulation = next(p for p in plans if p.reminder_type == ReminderType.ovulation)
        assert ovulation.scheduled_date == date(2026, 3, 6)
        assert ovulation.message == "Ovulation is expected in 3 days."
