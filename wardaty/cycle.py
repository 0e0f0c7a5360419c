import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from typing import Any

from config.settings import (
    DEFAULT_CYCLE_LENGTH,
    DEFAULT_PERIOD_LENGTH,
    MAX_CYCLE_LENGTH,
    MIN_CYCLE_LENGTH,
)

logger = logging.getLogger(__name__)

# Fixed-day model: ovulation on day 14 whatever the cycle length
OVULATION_DAY = 14
FERTILE_START_DAY = 12
FERTILE_END_DAY = 16


class CyclePhase(str, Enum):
    PERIOD = "period"
    FOLLICULAR = "follicular"
    FERTILE = "fertile"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


@dataclass(frozen=True)
class CycleSettings:
    """User cycle configuration as handed over by the settings store.

    ``degraded`` is True when invalid lengths were replaced by defaults.
    """

    last_period_start: date | None
    cycle_length: int = DEFAULT_CYCLE_LENGTH
    period_length: int = DEFAULT_PERIOD_LENGTH
    degraded: bool = field(default=False, compare=False)
    sanitized: bool = field(default=False, compare=False, repr=False)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "CycleSettings":
        """Build settings from the settings store.

        Reads the store's camelCase keys (``lastPeriodStart``, ``cycleLength``,
        ``periodLength``) or their snake_case spellings. A missing or null
        length falls back to the default. Raises ValueError on a malformed
        date or length.
        """
        raw_start = _first_present(config, "lastPeriodStart", "last_period_start")
        cycle_length = _first_present(config, "cycleLength", "cycle_length")
        period_length = _first_present(config, "periodLength", "period_length")
        return cls(
            last_period_start=_parse_iso_date(raw_start) if raw_start else None,
            cycle_length=_parse_length(cycle_length, DEFAULT_CYCLE_LENGTH),
            period_length=_parse_length(period_length, DEFAULT_PERIOD_LENGTH),
        )


@dataclass(frozen=True)
class CycleLogEntry:
    date: date
    is_period: bool
    flow: str | None = None
    symptoms: tuple[str, ...] = ()
    notes: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CycleLogEntry":
        return cls(
            date=parse_record_date(record),
            is_period=bool(record.get("isPeriod", record.get("is_period", False))),
            flow=record.get("flow"),
            symptoms=tuple(record.get("symptoms") or ()),
            notes=record.get("notes"),
        )


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _parse_iso_date(raw: Any) -> date:
    if not isinstance(raw, str):
        raise ValueError(f"Expected an ISO date string, got {raw!r}")
    return date.fromisoformat(raw)


def _parse_length(raw: Any, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid length: {raw!r}") from e


def parse_record_date(record: Mapping[str, Any]) -> date:
    """Read the ``date`` field of a stored log row, raising ValueError if absent."""
    raw = record.get("date")
    if raw is None:
        raise ValueError(f"Log record has no date: {dict(record)!r}")
    return _parse_iso_date(raw)


def sanitize_settings(settings: CycleSettings) -> CycleSettings:
    """Return settings safe to compute with.

    Non-positive lengths are swapped for the defaults and flagged as degraded
    so the caller can tell the result is a fallback. Settings that already
    went through here come back untouched, so notices are logged once.
    """
    if settings.sanitized:
        return settings

    cycle_length = settings.cycle_length
    period_length = settings.period_length
    degraded = settings.degraded

    if cycle_length <= 0:
        logger.warning(f"Invalid cycle_length={cycle_length}, falling back to {DEFAULT_CYCLE_LENGTH}")
        cycle_length = DEFAULT_CYCLE_LENGTH
        degraded = True
    elif not MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH:
        logger.info(f"cycle_length={cycle_length} is outside {MIN_CYCLE_LENGTH}-{MAX_CYCLE_LENGTH}, using as-is")

    if period_length <= 0:
        logger.warning(f"Invalid period_length={period_length}, falling back to {DEFAULT_PERIOD_LENGTH}")
        period_length = DEFAULT_PERIOD_LENGTH
        degraded = True
    elif period_length >= cycle_length:
        logger.info(f"period_length={period_length} is not shorter than cycle_length={cycle_length}")

    return replace(
        settings,
        cycle_length=cycle_length,
        period_length=period_length,
        degraded=degraded,
        sanitized=True,
    )


def days_between(start: date, end: date) -> int:
    return (end - start).days


def get_cycle_day(target: date, settings: CycleSettings) -> int | None:
    """Return the 1-based cycle day of ``target``, or None without an anchor.

    Dates before the last period start wrap into the earlier cycles.
    """
    if settings.last_period_start is None:
        return None
    settings = sanitize_settings(settings)
    delta = days_between(settings.last_period_start, target)
    # Floor modulo keeps negative deltas in range
    return delta % settings.cycle_length + 1


def classify_cycle_day(cycle_day: int, cycle_length: int, period_length: int) -> CyclePhase:
    """Map a cycle day to its phase. First matching rule wins."""
    if cycle_day <= period_length:
        return CyclePhase.PERIOD
    if cycle_day == OVULATION_DAY:
        return CyclePhase.OVULATION
    if FERTILE_START_DAY <= cycle_day <= FERTILE_END_DAY:
        return CyclePhase.FERTILE
    if cycle_day <= (cycle_length + 1) // 2:
        return CyclePhase.FOLLICULAR
    return CyclePhase.LUTEAL


def get_phase(target: date, settings: CycleSettings) -> CyclePhase | None:
    settings = sanitize_settings(settings)
    cycle_day = get_cycle_day(target, settings)
    if cycle_day is None:
        return None
    return classify_cycle_day(cycle_day, settings.cycle_length, settings.period_length)


def display_phase(phase: CyclePhase | None, show_fertile: bool) -> CyclePhase | None:
    """Hide fertile/ovulation behind follicular unless fertility display is on."""
    if not show_fertile and phase in (CyclePhase.FERTILE, CyclePhase.OVULATION):
        return CyclePhase.FOLLICULAR
    return phase


def get_current_cycle_start(today: date, settings: CycleSettings) -> date | None:
    """Get the start date of the cycle containing ``today``."""
    cycle_day = get_cycle_day(today, settings)
    if cycle_day is None:
        return None
    return today - timedelta(days=cycle_day - 1)


def days_until_next_period(today: date, settings: CycleSettings) -> int | None:
    """Days from ``today`` to the next predicted period start, in [1, cycle_length]."""
    settings = sanitize_settings(settings)
    cycle_day = get_cycle_day(today, settings)
    if cycle_day is None:
        return None
    return settings.cycle_length - cycle_day + 1


def next_period_date(today: date, settings: CycleSettings) -> date | None:
    remaining = days_until_next_period(today, settings)
    if remaining is None:
        return None
    return today + timedelta(days=remaining)


def date_for_cycle_day(cycle_day: int, today: date, settings: CycleSettings) -> date | None:
    """Return the date of ``cycle_day`` within the cycle containing ``today``."""
    settings = sanitize_settings(settings)
    if not 1 <= cycle_day <= settings.cycle_length:
        return None
    cycle_start = get_current_cycle_start(today, settings)
    if cycle_start is None:
        return None
    return cycle_start + timedelta(days=cycle_day - 1)


def fertile_window(today: date, settings: CycleSettings) -> tuple[date, date] | None:
    """Fertile window (days 12-16) of the current cycle, clipped to its length."""
    settings = sanitize_settings(settings)
    if settings.cycle_length < FERTILE_START_DAY:
        return None
    start = date_for_cycle_day(FERTILE_START_DAY, today, settings)
    end = date_for_cycle_day(min(FERTILE_END_DAY, settings.cycle_length), today, settings)
    if start is None or end is None:
        return None
    return start, end


def predict_dates(today: date, settings: CycleSettings) -> dict | None:
    """Predict next period, next ovulation and the current fertile window."""
    settings = sanitize_settings(settings)
    next_period = next_period_date(today, settings)
    if next_period is None:
        return None

    next_ovulation = None
    if settings.cycle_length >= OVULATION_DAY:
        next_ovulation = date_for_cycle_day(OVULATION_DAY, today, settings)
        # Already past this cycle's ovulation day, look at the next cycle
        if next_ovulation < today:
            next_ovulation += timedelta(days=settings.cycle_length)

    return {
        "next_period": next_period,
        "next_ovulation": next_ovulation,
        "fertile_window": fertile_window(today, settings),
    }
