"""CRUD endpoints for cycle entries (logged periods).

A cycle's ``cycle_length`` is the gap to the next logged start.  Creating or
deleting an entry changes that gap for its neighbours, so both paths refresh
the stored lengths in the same transaction.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import asyncpg
from fastapi import APIRouter, HTTPException

from src.cycle.records import cycle_length_days, period_length_days
from src.dependencies import UserId
from src.models.base import ErrorDetail
from src.models.tracking import CycleEntryCreate, CycleEntryRead, CycleEntryUpdate
from src.services.database import fetch, get_connection

router = APIRouter(prefix="/users/{user_id}/cycles", tags=["cycles"])
logger = logging.getLogger("cycletrack.routers.cycles")

NOT_FOUND = {404: {"model": ErrorDetail}}


async def _previous_cycle(
    conn: asyncpg.Connection, user_id: str, start_date: date
) -> asyncpg.Record | None:
    return await conn.fetchrow(
        """
        SELECT id, start_date FROM cycle_entries
        WHERE user_id = $1 AND start_date < $2
        ORDER BY start_date DESC, id DESC
        LIMIT 1
        """,
        user_id, start_date,
    )


async def _refresh_cycle_length(
    conn: asyncpg.Connection, user_id: str, cycle_id: int, start_date: date
) -> int | None:
    """Store the gap to the next logged start, or NULL when none follows."""
    successor = await conn.fetchrow(
        """
        SELECT start_date FROM cycle_entries
        WHERE user_id = $1 AND start_date > $2
        ORDER BY start_date ASC, id ASC
        LIMIT 1
        """,
        user_id, start_date,
    )
    length = cycle_length_days(start_date, successor["start_date"]) if successor else None
    await conn.execute(
        "UPDATE cycle_entries SET cycle_length = $1, updated_at = NOW() WHERE id = $2",
        length, cycle_id,
    )
    logger.info("Set cycle_length=%s on cycle %s for user %s", length, cycle_id, user_id)
    return length


@router.get("", response_model=list[CycleEntryRead])
async def list_cycles(user_id: UserId) -> Any:
    rows = await fetch(
        "SELECT * FROM cycle_entries WHERE user_id = $1 ORDER BY start_date DESC, id DESC",
        user_id,
    )
    return [dict(r) for r in rows]


@router.post("", response_model=CycleEntryRead, status_code=201)
async def create_cycle(user_id: UserId, body: CycleEntryCreate) -> Any:
    """Log a new period.

    The new entry may be backfilled between existing ones, so both its own
    length and its predecessor's are derived here.
    """
    period_length = (
        period_length_days(body.start_date, body.end_date) if body.end_date else None
    )
    async with get_connection() as conn:
        row = await conn.fetchrow(
            """
            INSERT INTO cycle_entries (user_id, start_date, end_date, period_length, notes)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING *
            """,
            user_id, body.start_date, body.end_date, period_length, body.notes,
        )
        length = await _refresh_cycle_length(conn, user_id, row["id"], body.start_date)
        previous = await _previous_cycle(conn, user_id, body.start_date)
        if previous:
            await _refresh_cycle_length(conn, user_id, previous["id"], previous["start_date"])
    return {**dict(row), "cycle_length": length}


@router.patch("/{cycle_id}", response_model=CycleEntryRead, responses=NOT_FOUND)
async def update_cycle(user_id: UserId, cycle_id: int, body: CycleEntryUpdate) -> Any:
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    async with get_connection() as conn:
        existing = await conn.fetchrow(
            "SELECT * FROM cycle_entries WHERE id = $1 AND user_id = $2",
            cycle_id, user_id,
        )
        if not existing:
            raise HTTPException(status_code=404, detail="Cycle entry not found")

        end_date = updates.get("end_date")
        if end_date is not None:
            if end_date < existing["start_date"]:
                raise HTTPException(
                    status_code=400, detail="end_date must not be before start_date"
                )
            updates["period_length"] = period_length_days(existing["start_date"], end_date)
        elif "end_date" in updates:
            updates["period_length"] = None

        set_clauses = []
        params: list[Any] = [cycle_id, user_id]
        for i, (key, value) in enumerate(updates.items(), start=3):
            set_clauses.append(f"{key} = ${i}")
            params.append(value)
        set_clauses.append("updated_at = NOW()")

        row = await conn.fetchrow(
            f"""
            UPDATE cycle_entries SET {', '.join(set_clauses)}
            WHERE id = $1 AND user_id = $2
            RETURNING *
            """,
            *params,
        )
    return dict(row)


@router.delete("/{cycle_id}", response_model=CycleEntryRead, responses=NOT_FOUND)
async def delete_cycle(user_id: UserId, cycle_id: int) -> Any:
    """Delete an entry and re-derive its predecessor's length from what remains."""
    async with get_connection() as conn:
        row = await conn.fetchrow(
            "DELETE FROM cycle_entries WHERE id = $1 AND user_id = $2 RETURNING *",
            cycle_id, user_id,
        )
        if not row:
            raise HTTPException(status_code=404, detail="Cycle entry not found")
        previous = await _previous_cycle(conn, user_id, row["start_date"])
        if previous:
            await _refresh_cycle_length(conn, user_id, previous["id"], previous["start_date"])
    return dict(row)
