"""Per-day flags combining the Hijri calendar with the cycle model.

Two qadha rules coexist on purpose: the calendar dot marks only White Days
outside the period (``is_qadha_suitable``), while the day's todo list offers
qadha on any non-period day (``is_qadha_todo``).
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from wardaty.cycle import (
    CycleLogEntry,
    CyclePhase,
    CycleSettings,
    display_phase,
    get_cycle_day,
    get_phase,
    sanitize_settings,
)
from wardaty.hijri import WHITE_DAYS, HijriDate, gregorian_to_hijri, is_white_day
from wardaty.qadha import QadhaKind, QadhaLogEntry

GRID_CELLS = 42


class Persona(str, Enum):
    SINGLE = "single"
    PARTNER = "partner"
    MARRIED = "married"
    MOTHER = "mother"


@dataclass(frozen=True)
class DayInfo:
    date: date
    cycle_day: int | None
    phase: CyclePhase | None
    detailed_phase: CyclePhase | None
    hijri: HijriDate
    lunar_day: int
    is_white_day: bool
    is_period_logged: bool
    is_period: bool
    is_fertile: bool
    is_ovulation: bool
    is_follicular: bool
    is_luteal: bool
    is_qadha_suitable: bool
    is_qadha_todo: bool
    is_qadha_missed: bool
    degraded: bool = False


def show_fertile_for(persona: Persona | str) -> bool:
    return Persona(persona) == Persona.MARRIED


def _is_logged_period(target: date, cycle_logs: Iterable[CycleLogEntry]) -> bool:
    return any(log.date == target and log.is_period for log in cycle_logs)


def is_period_day(target: date, settings: CycleSettings, cycle_logs: Iterable[CycleLogEntry] = ()) -> bool:
    """A predicted period day or a day the user logged as period."""
    return get_phase(target, settings) == CyclePhase.PERIOD or _is_logged_period(target, cycle_logs)


def is_qadha_suitable(target: date, settings: CycleSettings, cycle_logs: Iterable[CycleLogEntry] = ()) -> bool:
    return not is_period_day(target, settings, cycle_logs) and is_white_day(target)


def is_qadha_todo(target: date, settings: CycleSettings, cycle_logs: Iterable[CycleLogEntry] = ()) -> bool:
    return not is_period_day(target, settings, cycle_logs)


def is_fertile(target: date, settings: CycleSettings, show_fertile: bool) -> bool:
    phase = get_phase(target, settings)
    return show_fertile and phase == CyclePhase.FERTILE


def is_ovulation(target: date, settings: CycleSettings, show_fertile: bool) -> bool:
    phase = get_phase(target, settings)
    return show_fertile and phase == CyclePhase.OVULATION


def get_day_info(
    target: date,
    settings: CycleSettings,
    *,
    show_fertile: bool = False,
    cycle_logs: Iterable[CycleLogEntry] = (),
    qadha_entries: Iterable[QadhaLogEntry] = (),
) -> DayInfo:
    settings = sanitize_settings(settings)
    cycle_logs = list(cycle_logs)
    phase = get_phase(target, settings)
    hijri = gregorian_to_hijri(target)
    white_day = hijri.day in WHITE_DAYS
    period_logged = _is_logged_period(target, cycle_logs)
    period = period_logged or phase == CyclePhase.PERIOD

    return DayInfo(
        date=target,
        cycle_day=get_cycle_day(target, settings),
        phase=display_phase(phase, show_fertile),
        detailed_phase=phase,
        hijri=hijri,
        lunar_day=hijri.day,
        is_white_day=white_day,
        is_period_logged=period_logged,
        is_period=period,
        is_fertile=show_fertile and phase == CyclePhase.FERTILE,
        is_ovulation=show_fertile and phase == CyclePhase.OVULATION,
        is_follicular=phase == CyclePhase.FOLLICULAR,
        is_luteal=phase == CyclePhase.LUTEAL,
        is_qadha_suitable=not period and white_day,
        is_qadha_todo=not period,
        is_qadha_missed=any(
            entry.date == target and entry.kind == QadhaKind.MISSED for entry in qadha_entries
        ),
        degraded=settings.degraded,
    )


def month_grid(year: int, month: int) -> list[tuple[date, bool]]:
    """Return 42 Sunday-first cells as (date, in_month) for a Gregorian month."""
    weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month)
    days = [day for week in weeks for day in week]
    # Short months span 4-5 weeks; pad to a fixed six-row grid
    while len(days) < GRID_CELLS:
        days.append(days[-1] + timedelta(days=1))
    return [(day, day.month == month) for day in days]


def month_day_info(
    year: int,
    month: int,
    settings: CycleSettings,
    *,
    show_fertile: bool = False,
    cycle_logs: Iterable[CycleLogEntry] = (),
    qadha_entries: Iterable[QadhaLogEntry] = (),
) -> list[DayInfo]:
    """Day info for every cell of the month grid."""
    settings = sanitize_settings(settings)
    cycle_logs = list(cycle_logs)
    qadha_entries = list(qadha_entries)
    return [
        get_day_info(
            day,
            settings,
            show_fertile=show_fertile,
            cycle_logs=cycle_logs,
            qadha_entries=qadha_entries,
        )
        for day, _ in month_grid(year, month)
    ]
