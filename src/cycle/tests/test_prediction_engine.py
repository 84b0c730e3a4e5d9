"""Tests for next-cycle date prediction."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.cycle.config_loader import CycleEngineConfig, FertileWindowConfig
from src.cycle.prediction_engine import compute_prediction
from src.cycle.records import Preferences
from src.cycle.tests.conftest import TEST_DATE, make_record


class TestComputePrediction:
    def test_anchors_on_latest_start(self, cycle_config: CycleEngineConfig) -> None:
        prefs = Preferences(average_cycle_length=30)
        prediction = compute_prediction([make_record(15)], prefs, TEST_DATE, cycle_config)
        start = TEST_DATE - timedelta(days=15)
        assert prediction.next_period_date == start + timedelta(days=30)
        assert prediction.next_ovulation_date == start + timedelta(days=16)
        assert prediction.fertile_window_start == start + timedelta(days=11)
        assert prediction.fertile_window_end == start + timedelta(days=17)

    def test_empty_history_starts_today(self, cycle_config: CycleEngineConfig) -> None:
        prediction = compute_prediction([], None, TEST_DATE, cycle_config)
        assert prediction.next_period_date == TEST_DATE + timedelta(days=28)
        assert prediction.next_ovulation_date == TEST_DATE + timedelta(days=14)
        assert prediction.fertile_window_start == TEST_DATE + timedelta(days=9)
        assert prediction.fertile_window_end == TEST_DATE + timedelta(days=15)

    def test_empty_history_strips_time(self, cycle_config: CycleEngineConfig) -> None:
        now = datetime(2026, 2, 23, 18, 45)
        prediction = compute_prediction([], None, now, cycle_config)
        assert prediction.next_period_date == TEST_DATE + timedelta(days=28)

    def test_uses_average_not_recorded_cycle_length(
        self, cycle_config: CycleEngineConfig
    ) -> None:
        """Predictions follow the preference average, not the last cycle's length."""
        record = make_record(3, cycle_length=35)
        prediction = compute_prediction([record], None, TEST_DATE, cycle_config)
        assert prediction.next_period_date == record.start_date + timedelta(days=28)

    def test_picks_latest_from_unordered_history(
        self, cycle_config: CycleEngineConfig
    ) -> None:
        history = [make_record(60), make_record(2), make_record(31)]
        prediction = compute_prediction(history, None, TEST_DATE, cycle_config)
        assert prediction.next_period_date == TEST_DATE + timedelta(days=26)

    def test_today_is_ignored_when_history_exists(
        self, cycle_config: CycleEngineConfig
    ) -> None:
        history = [make_record(10)]
        a = compute_prediction(history, None, TEST_DATE, cycle_config)
        b = compute_prediction(history, None, TEST_DATE + timedelta(days=40), cycle_config)
        assert a == b

    @pytest.mark.parametrize("avg_length", [1, 7, 21, 28, 35, 60])
    def test_window_ordering(
        self, cycle_config: CycleEngineConfig, avg_length: int
    ) -> None:
        prefs = Preferences(average_cycle_length=avg_length)
        p = compute_prediction([make_record(4)], prefs, TEST_DATE, cycle_config)
        assert p.fertile_window_start < p.next_ovulation_date
        assert p.next_ovulation_date < p.fertile_window_end
        assert p.fertile_window_end < p.next_period_date

    def test_fertile_offsets_come_from_config(self) -> None:
        config = CycleEngineConfig(
            fertile_window=FertileWindowConfig(days_before_ovulation=3, days_after_ovulation=2)
        )
        p = compute_prediction([], None, TEST_DATE, config)
        assert (p.next_ovulation_date - p.fertile_window_start).days == 3
        assert (p.fertile_window_end - p.next_ovulation_date).days == 2

    def test_repeat_calls_are_identical(self, cycle_config: CycleEngineConfig) -> None:
        history = [make_record(9)]
        prefs = Preferences(average_cycle_length=26)
        assert compute_prediction(history, prefs, TEST_DATE, cycle_config) == (
            compute_prediction(history, prefs, TEST_DATE, cycle_config)
        )
