"""Plain-data views handed to the UI layer.

Everything returned here is JSON-serializable: dates are ISO strings and
enums are their string values.
"""

from collections.abc import Iterable
from dataclasses import asdict
from datetime import date

from wardaty.cycle import (
    CycleLogEntry,
    CycleSettings,
    days_until_next_period,
    display_phase,
    get_cycle_day,
    get_phase,
    next_period_date,
    sanitize_settings,
)
from wardaty.flags import is_qadha_suitable
from wardaty.hijri import WHITE_DAYS, gregorian_to_hijri
from wardaty.qadha import QadhaLogEntry, summarize


def build_summary(
    today: date,
    settings: CycleSettings,
    *,
    qadha_entries: Iterable[QadhaLogEntry] = (),
    total_missed_override: int | None = None,
    show_fertile: bool = False,
    cycle_logs: Iterable[CycleLogEntry] = (),
) -> dict:
    """Home-screen summary for ``today``."""
    settings = sanitize_settings(settings)
    phase = display_phase(get_phase(today, settings), show_fertile)
    next_period = next_period_date(today, settings)
    hijri = gregorian_to_hijri(today)

    return {
        "cycle_day": get_cycle_day(today, settings),
        "phase": phase.value if phase else None,
        "days_until_next_period": days_until_next_period(today, settings),
        "next_period_date": next_period.isoformat() if next_period else None,
        "hijri": asdict(hijri),
        "is_white_day": hijri.day in WHITE_DAYS,
        "is_qadha_suitable": is_qadha_suitable(today, settings, cycle_logs),
        "qadha_summary": summarize(qadha_entries, total_missed_override).to_dict(),
        "degraded": settings.degraded,
    }


def cycle_stats(today: date, settings: CycleSettings, cycle_logs: Iterable[CycleLogEntry] = ()) -> dict:
    """Figures for the statistics screen."""
    settings = sanitize_settings(settings)
    period_days = {
        log.date
        for log in cycle_logs
        if log.is_period and log.date.year == today.year and log.date.month == today.month
    }
    return {
        "cycle_day": get_cycle_day(today, settings),
        "cycle_length": settings.cycle_length,
        "period_length": settings.period_length,
        "period_days_this_month": len(period_days),
        "degraded": settings.degraded,
    }
