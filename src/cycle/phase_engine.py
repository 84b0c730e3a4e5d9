"""Current-phase inference.

Maps today's position relative to the most recent period start onto one of
four phases.  Only the menstrual boundary follows the user's average period
length; the follicular, ovulation and fertile boundaries are fixed day
numbers from ``cycle_config.yaml`` and do not scale with cycle length, so
late-cycle phases are skewed for users whose cycles are far from 28 days.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from src.cycle.config_loader import CycleEngineConfig, get_cycle_config
from src.cycle.records import (
    CyclePhase,
    CycleRecord,
    PhaseInfo,
    Preferences,
    effective_cycle_length,
    most_recent_cycle,
    resolve_averages,
    to_calendar_day,
)

logger = logging.getLogger("cycletrack.cycle.phase")


def classify_phase(
    day_in_cycle: int, average_period_length: int, config: CycleEngineConfig
) -> CyclePhase:
    """Return the phase for a 1-based day in the cycle.

    Boundaries are checked in order, so an average period length longer than
    the follicular boundary swallows the follicular phase entirely.
    """
    if day_in_cycle <= average_period_length:
        return CyclePhase.menstrual
    if day_in_cycle <= config.phases.follicular_last_day:
        return CyclePhase.follicular
    if day_in_cycle <= config.phases.ovulation_last_day:
        return CyclePhase.ovulation
    return CyclePhase.luteal


def compute_phase(
    history: list[CycleRecord],
    preferences: Preferences | None,
    today: date | datetime,
    config: CycleEngineConfig | None = None,
) -> PhaseInfo:
    """Compute the current phase, cycle day, countdown and fertility flag.

    Args:
        history:     The user's cycle records, in any order.  Only the one
                     with the latest start date is used.
        preferences: The user's averages, or None for the defaults.
        today:       The reference day.  Datetimes are truncated to a day.
        config:      Engine constants; the global config by default.

    Returns:
        PhaseInfo.  With no history the user is assumed to be mid-cycle in
        the follicular phase.

    A start date in the future gives a negative day offset.  It wraps with a
    floored modulo, so the cycle day stays within ``1..cycle_length`` and the
    countdown equals the days left until that start.
    """
    cfg = config or get_cycle_config()
    today = to_calendar_day(today)
    avg_cycle_length, avg_period_length = resolve_averages(preferences, cfg)

    latest = most_recent_cycle(history)
    if latest is None:
        midpoint = avg_cycle_length // 2
        logger.debug("No cycle history; assuming mid-cycle day %d", midpoint)
        return PhaseInfo(
            phase=CyclePhase.follicular,
            day_in_cycle=midpoint,
            days_until_next_period=midpoint,
            is_fertile_window=False,
        )

    days_since_start = (today - to_calendar_day(latest.start_date)).days
    cycle_length = effective_cycle_length(latest, avg_cycle_length)
    offset = days_since_start % cycle_length

    day_in_cycle = offset + 1
    days_until_next_period = cycle_length - offset
    if days_until_next_period == cycle_length:
        days_until_next_period = 0  # today is a period start day

    return PhaseInfo(
        phase=classify_phase(day_in_cycle, avg_period_length, cfg),
        day_in_cycle=day_in_cycle,
        days_until_next_period=days_until_next_period,
        is_fertile_window=cfg.is_fertile_day(day_in_cycle),
    )
