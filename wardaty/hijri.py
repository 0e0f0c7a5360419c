"""Tabular (arithmetic) Hijri calendar.

Civil epoch: 1 Muharram 1 AH = JDN 1948440. Eleven leap years in every
30-year cycle, each adding a day to Dhu al-Hijjah. Odd months have 30 days,
even months 29. This does not track moon sighting and may differ from
announced dates by a day or two.
"""

import logging
from dataclasses import dataclass
from datetime import date

from wardaty.julian import from_julian_day, to_julian_day

logger = logging.getLogger(__name__)

HIJRI_EPOCH_JDN = 1948440
WHITE_DAYS = (13, 14, 15)

HIJRI_MONTHS_AR = (
    "محرم",
    "صفر",
    "ربيع الأول",
    "ربيع الثاني",
    "جمادى الأولى",
    "جمادى الآخرة",
    "رجب",
    "شعبان",
    "رمضان",
    "شوال",
    "ذو القعدة",
    "ذو الحجة",
)

HIJRI_MONTHS_EN = (
    "Muharram",
    "Safar",
    "Rabi' al-Awwal",
    "Rabi' al-Thani",
    "Jumada al-Awwal",
    "Jumada al-Thani",
    "Rajab",
    "Sha'ban",
    "Ramadan",
    "Shawwal",
    "Dhu al-Qi'dah",
    "Dhu al-Hijjah",
)

_MONTH_TABLES = {
    "ar": HIJRI_MONTHS_AR,
    "en": HIJRI_MONTHS_EN,
}


@dataclass(frozen=True)
class HijriDate:
    day: int
    month: int
    year: int
    month_name: str
    month_name_en: str


def get_month_name(month: int, language: str = "ar") -> str:
    """Return the month name, or "" for an unknown month or language."""
    table = _MONTH_TABLES.get(language)
    if table is None or not 1 <= month <= 12:
        logger.warning(f"No Hijri month name for month={month!r}, language={language!r}")
        return ""
    return table[month - 1]


def is_leap_year(year: int) -> bool:
    return (14 + 11 * year) % 30 < 11


def year_length(year: int) -> int:
    return 355 if is_leap_year(year) else 354


def month_length(year: int, month: int) -> int:
    if month == 12 and is_leap_year(year):
        return 30
    return 30 if month % 2 == 1 else 29


def _days_before_month(month: int) -> int:
    # ceil(29.5 * (month - 1)) in integers
    return (59 * (month - 1) + 1) // 2


def hijri_to_jdn(year: int, month: int, day: int) -> int:
    return (
        day
        + _days_before_month(month)
        + (year - 1) * 354
        + (3 + 11 * year) // 30
        + HIJRI_EPOCH_JDN
        - 1
    )


def jdn_to_hijri(jdn: int) -> HijriDate:
    year = (30 * (jdn - HIJRI_EPOCH_JDN) + 10646) // 10631
    into_year = jdn - 29 - hijri_to_jdn(year, 1, 1)
    # ceil(into_year / 29.5), then shift to a 1-based month
    month = min(12, -((-2 * into_year) // 59) + 1)
    day = jdn - hijri_to_jdn(year, month, 1) + 1
    return HijriDate(
        day=day,
        month=month,
        year=year,
        month_name=get_month_name(month, "ar"),
        month_name_en=get_month_name(month, "en"),
    )


def gregorian_to_hijri(d: date) -> HijriDate:
    return jdn_to_hijri(to_julian_day(d))


def hijri_to_gregorian(year: int, month: int, day: int) -> date:
    """Convert a Hijri (year, month, day) to a Gregorian date.

    Raises ValueError if the month or day is outside the tabular calendar.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Hijri month must be in 1..12, got {month}")
    length = month_length(year, month)
    if not 1 <= day <= length:
        raise ValueError(f"Hijri day must be in 1..{length} for {year}-{month}, got {day}")
    return from_julian_day(hijri_to_jdn(year, month, day))


def get_lunar_day(d: date) -> int:
    return gregorian_to_hijri(d).day


def is_white_day(d: date) -> bool:
    """White Days are the 13th, 14th and 15th of every Hijri month."""
    return get_lunar_day(d) in WHITE_DAYS


def hijri_month_dates(year: int, month: int) -> list[date]:
    """Return every Gregorian date falling in the given Hijri month."""
    first = to_julian_day(hijri_to_gregorian(year, month, 1))
    return [from_julian_day(first + offset) for offset in range(month_length(year, month))]


def white_days(year: int, month: int) -> list[date]:
    return [hijri_to_gregorian(year, month, day) for day in WHITE_DAYS]
