"""Shared fixtures for cycle engine tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.cycle.config_loader import CycleEngineConfig, load_cycle_config
from src.cycle.records import CyclePrediction, CycleRecord

TEST_USER_ID = "user-1"
TEST_DATE = date(2026, 2, 23)


def make_record(
    days_ago: int,
    cycle_length: int | None = None,
    today: date = TEST_DATE,
) -> CycleRecord:
    """A cycle that started ``days_ago`` days before ``today``."""
    return CycleRecord(
        cycle_id=days_ago,
        user_id=TEST_USER_ID,
        start_date=today - timedelta(days=days_ago),
        cycle_length=cycle_length,
    )


@pytest.fixture
def cycle_config() -> CycleEngineConfig:
    """The bundled cycle_config.yaml."""
    return load_cycle_config()


@pytest.fixture
def sample_prediction() -> CyclePrediction:
    """Prediction for a 28-day cycle that started on TEST_DATE."""
    return CyclePrediction(
        next_period_date=date(2026, 3, 23),
        next_ovulation_date=date(2026, 3, 9),
        fertile_window_start=date(2026, 3, 4),
        fertile_window_end=date(2026, 3, 10),
    )
