"""Shared fixtures for API tests.  Store access is patched per test."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.dependencies import get_clock
from src.main import create_app

FIXED_NOW = datetime(2026, 2, 23, 8, 5, 9, tzinfo=timezone.utc)
API_USER = "/api/v1/users/user-1"


def make_connection(*fetchrow_results: Any) -> tuple[MagicMock, Any]:
    """A mock asyncpg connection and a ``get_connection`` replacement yielding it.

    ``conn.fetchrow`` returns the given results in order.
    """
    conn = MagicMock()
    conn.fetchrow = AsyncMock(side_effect=list(fetchrow_results))
    conn.execute = AsyncMock(return_value="UPDATE 1")

    @asynccontextmanager
    async def _get_connection():
        yield conn

    return conn, _get_connection


@pytest.fixture
def client() -> Iterator[TestClient]:
    """App client with a frozen clock and no database pool."""
    app = create_app()
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    yield TestClient(app)
    app.dependency_overrides.clear()
