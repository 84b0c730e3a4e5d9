"""Load, validate, and hot-reload the cycle engine constants.

The constants live in ``cycle_config.yaml`` alongside this module.  They are
loaded once and cached.  Call ``reload_cycle_config()`` to re-read from disk
after an edit without restarting.

Usage::

    from src.cycle.config_loader import get_cycle_config

    config = get_cycle_config()
    config.phases.ovulation_last_day        # 16
    config.fertile_window.days_before_ovulation  # 5
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger("cycletrack.cycle.config")

_CONFIG_PATH = Path(__file__).parent / "cycle_config.yaml"

# Domains accepted for user preferences; defaults must fall inside them.
CYCLE_LENGTH_RANGE = (21, 35)
PERIOD_LENGTH_RANGE = (3, 10)
REMINDER_DAYS_RANGE = (0, 7)


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class DefaultsConfig:
    """Values used when a user has no stored preferences."""

    average_cycle_length: int = 28
    average_period_length: int = 5
    reminder_days_before: int = 2


@dataclass
class PhaseBoundaries:
    """Last day-in-cycle of each phase after menstruation.

    The menstrual boundary comes from the user's average period length.
    """

    follicular_last_day: int = 13
    ovulation_last_day: int = 16


@dataclass
class FertileWindowConfig:
    first_day: int = 12
    last_day: int = 16
    days_before_ovulation: int = 5
    days_after_ovulation: int = 1


@dataclass
class CycleEngineConfig:
    """Complete, validated engine configuration.

    Attributes:
        version:            Config schema version string.
        defaults:           Fallback preference values.
        phases:             Fixed phase boundaries (day-in-cycle).
        fertile_window:     Fertile day range and ovulation offsets.
        luteal_phase_days:  Days between predicted ovulation and next period.
        pms_days_before_period: Anchor offset for PMS reminders.
    """

    version: str = "1.0"
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    phases: PhaseBoundaries = field(default_factory=PhaseBoundaries)
    fertile_window: FertileWindowConfig = field(default_factory=FertileWindowConfig)
    luteal_phase_days: int = 14
    pms_days_before_period: int = 5
    _raw: dict = field(default_factory=dict, repr=False)

    def is_fertile_day(self, day_in_cycle: int) -> bool:
        fw = self.fertile_window
        return fw.first_day <= day_in_cycle <= fw.last_day


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when cycle_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Cycle config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> CycleEngineConfig:
    """Validate the raw YAML dict and construct a CycleEngineConfig.

    Missing keys fall back to the dataclass defaults.  Every problem is
    collected before raising so a single edit can fix them all.

    Raises:
        ConfigValidationError: If any value is invalid.
    """
    errors: list[str] = []

    def _int(section: dict, key: str, name: str, default: int, minimum: int = 1) -> int:
        value: Any = section.get(key, default)
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{name}.{key} must be an integer, got {value!r}")
            return default
        if number < minimum:
            errors.append(f"{name}.{key} = {number} must be >= {minimum}")
        return number

    def _section(key: str) -> dict:
        value = raw.get(key) or {}
        if not isinstance(value, dict):
            errors.append(f"'{key}' must be a mapping")
            return {}
        return value

    version = str(raw.get("version", "1.0"))

    # ── Defaults ──
    d_raw = _section("defaults")
    defaults = DefaultsConfig(
        average_cycle_length=_int(d_raw, "average_cycle_length", "defaults", 28),
        average_period_length=_int(d_raw, "average_period_length", "defaults", 5),
        reminder_days_before=_int(d_raw, "reminder_days_before", "defaults", 2, minimum=0),
    )
    for key, (lo, hi) in (
        ("average_cycle_length", CYCLE_LENGTH_RANGE),
        ("average_period_length", PERIOD_LENGTH_RANGE),
        ("reminder_days_before", REMINDER_DAYS_RANGE),
    ):
        value = getattr(defaults, key)
        if not (lo <= value <= hi):
            errors.append(f"defaults.{key} = {value} is out of range [{lo}, {hi}]")

    # ── Phase boundaries ──
    p_raw = _section("phases")
    phases = PhaseBoundaries(
        follicular_last_day=_int(p_raw, "follicular_last_day", "phases", 13),
        ovulation_last_day=_int(p_raw, "ovulation_last_day", "phases", 16),
    )
    if phases.follicular_last_day >= phases.ovulation_last_day:
        errors.append(
            "phases.follicular_last_day must be less than phases.ovulation_last_day"
        )

    # ── Fertile window ──
    fw_raw = _section("fertile_window")
    fertile_window = FertileWindowConfig(
        first_day=_int(fw_raw, "first_day", "fertile_window", 12),
        last_day=_int(fw_raw, "last_day", "fertile_window", 16),
        days_before_ovulation=_int(fw_raw, "days_before_ovulation", "fertile_window", 5),
        days_after_ovulation=_int(fw_raw, "days_after_ovulation", "fertile_window", 1),
    )
    if fertile_window.first_day > fertile_window.last_day:
        errors.append("fertile_window.first_day must not exceed fertile_window.last_day")

    # ── Prediction / reminders ──
    luteal = _int(_section("prediction"), "luteal_phase_days", "prediction", 14)
    pms = _int(_section("reminders"), "pms_days_before_period", "reminders", 5, minimum=0)

    if errors:
        raise ConfigValidationError(
            f"cycle_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return CycleEngineConfig(
        version=version,
        defaults=defaults,
        phases=phases,
        fertile_window=fertile_window,
        luteal_phase_days=luteal,
        pms_days_before_period=pms,
        _raw=raw,
    )


def load_cycle_config(path: Path | None = None) -> CycleEngineConfig:
    """Load and validate the engine config from disk.

    Args:
        path: Override path to YAML. Uses the bundled cycle_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded cycle config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: CycleEngineConfig | None = None
_config_lock = threading.Lock()


def get_cycle_config() -> CycleEngineConfig:
    """Return the global CycleEngineConfig, loading it on first call.

    Thread-safe.  Use ``reload_cycle_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_cycle_config()
    return _config


def reload_cycle_config(path: Path | None = None) -> CycleEngineConfig:
    """Reload the config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_cycle_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded cycle config: %s -> %s", old_version, new_config.version)
    return new_config
