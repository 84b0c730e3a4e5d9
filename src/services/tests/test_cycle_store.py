"""Tests for record store row conversion and reads."""

from __future__ import annotations

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from src.cycle.config_loader import CycleEngineConfig, DefaultsConfig
from src.cycle.records import CycleRecord, Preferences
from src.services.cycle_store import (
    fetch_most_recent_cycle,
    fetch_preferences,
    get_or_default_preferences,
    preferences_from_row,
    record_from_row,
)

CYCLE_ROW = {
    "id": 3,
    "user_id": "user-1",
    "start_date": date(2026, 2, 1),
    "end_date": date(2026, 2, 5),
    "cycle_length": None,
    "period_length": 5,
    "notes": "cramps day 1",
    "created_at": datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc),
    "updated_at": datetime(2026, 2, 5, 9, 0, tzinfo=timezone.utc),
}

PREFERENCES_ROW = {
    "id": 1,
    "user_id": "user-1",
    "average_cycle_length": 30,
    "average_period_length": 4,
    "reminder_days_before": 1,
    "notification_enabled": False,
}


class TestRowConversion:
    def test_record_from_row(self) -> None:
        record = record_from_row(CYCLE_ROW)
        assert record.cycle_id == 3
        assert record.start_date == date(2026, 2, 1)
        assert record.end_date == date(2026, 2, 5)
        assert record.cycle_length is None
        assert record.period_length == 5

    def test_record_from_minimal_row(self) -> None:
        record = record_from_row({"id": 1, "user_id": "u", "start_date": date(2026, 1, 1)})
        assert record == CycleRecord(cycle_id=1, user_id="u", start_date=date(2026, 1, 1))

    def test_preferences_from_row(self) -> None:
        assert preferences_from_row(PREFERENCES_ROW) == Preferences(
            average_cycle_length=30,
            average_period_length=4,
            reminder_days_before=1,
            notification_enabled=False,
        )


class TestStoreReads:
    @pytest.mark.asyncio
    async def test_most_recent_cycle(self) -> None:
        with patch(
            "src.services.cycle_store.fetchrow", AsyncMock(return_value=CYCLE_ROW)
        ) as mock_fetchrow:
            record = await fetch_most_recent_cycle("user-1")
        assert record is not None
        assert record.start_date == date(2026, 2, 1)
        assert mock_fetchrow.await_args.args[1] == "user-1"

    @pytest.mark.asyncio
    async def test_most_recent_cycle_absent(self) -> None:
        with patch("src.services.cycle_store.fetchrow", AsyncMock(return_value=None)):
            assert await fetch_most_recent_cycle("user-1") is None

    @pytest.mark.asyncio
    async def test_missing_preferences_return_none(self) -> None:
        with patch("src.services.cycle_store.fetchrow", AsyncMock(return_value=None)):
            assert await fetch_preferences("user-1") is None

    @pytest.mark.asyncio
    async def test_get_or_default_uses_stored_row(self) -> None:
        with patch(
            "src.services.cycle_store.fetchrow", AsyncMock(return_value=PREFERENCES_ROW)
        ):
            prefs = await get_or_default_preferences("user-1")
        assert prefs.average_cycle_length == 30
        assert prefs.notification_enabled is False

    @pytest.mark.asyncio
    async def test_get_or_default_falls_back_without_writing(self) -> None:
        config = CycleEngineConfig(
            defaults=DefaultsConfig(
                average_cycle_length=30, average_period_length=6, reminder_days_before=3
            )
        )
        with patch(
            "src.services.cycle_store.fetchrow", AsyncMock(return_value=None)
        ) as mock_fetchrow:
            prefs = await get_or_default_preferences("user-1", config)
        assert prefs == Preferences(
            average_cycle_length=30,
            average_period_length=6,
            reminder_days_before=3,
            notification_enabled=True,
        )
        mock_fetchrow.assert_awaited_once()
        assert mock_fetchrow.await_args.args[0].strip().startswith("SELECT")
