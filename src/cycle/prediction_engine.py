"""Calendar-only prediction of the next period, ovulation and fertile window.

Ovulation is placed a fixed luteal length before the next period; the user's
preferences do not move it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from src.cycle.config_loader import CycleEngineConfig, get_cycle_config
from src.cycle.records import (
    CyclePrediction,
    CycleRecord,
    Preferences,
    most_recent_cycle,
    resolve_averages,
    to_calendar_day,
)

logger = logging.getLogger("cycletrack.cycle.prediction")


def compute_prediction(
    history: list[CycleRecord],
    preferences: Preferences | None,
    today: date | datetime,
    config: CycleEngineConfig | None = None,
) -> CyclePrediction:
    """Predict the next cycle's key dates.

    The anchor is the latest recorded start date.  With no history the cycle
    is assumed to start today.

    Args:
        history:     The user's cycle records, in any order.
        preferences: The user's averages, or None for the defaults.
        today:       The reference day, used only when history is empty.
        config:      Engine constants; the global config by default.
    """
    cfg = config or get_cycle_config()
    avg_cycle_length, _ = resolve_averages(preferences, cfg)

    latest = most_recent_cycle(history)
    if latest is None:
        anchor = to_calendar_day(today)
        logger.debug("No cycle history; anchoring prediction at %s", anchor)
    else:
        anchor = to_calendar_day(latest.start_date)

    fw = cfg.fertile_window
    next_period = anchor + timedelta(days=avg_cycle_length)
    ovulation = next_period - timedelta(days=cfg.luteal_phase_days)

    return CyclePrediction(
        next_period_date=next_period,
        next_ovulation_date=ovulation,
        fertile_window_start=ovulation - timedelta(days=fw.days_before_ovulation),
        fertile_window_end=ovulation + timedelta(days=fw.days_after_ovulation),
    )
