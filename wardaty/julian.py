from datetime import date, datetime, timezone


def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    """Return the Julian Day Number for a proleptic Gregorian date.

    Day-of-month bounds are not checked, so (2024, 1, 32) lands on Feb 1.
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def jdn_to_gregorian(jdn: int) -> tuple[int, int, int]:
    """Return the (year, month, day) triple for a Julian Day Number."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + m // 10
    return year, month, day


def to_julian_day(d: date) -> int:
    return gregorian_to_jdn(d.year, d.month, d.day)


def from_julian_day(jdn: int) -> date:
    return date(*jdn_to_gregorian(jdn))


def julian_date(dt: datetime) -> float:
    """Return the fractional Julian Date for a point in time.

    The day number starts at noon, so midnight is JDN - 0.5.
    Naive datetimes are treated as UTC.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    seconds = dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1_000_000
    return to_julian_day(dt.date()) - 0.5 + seconds / 86400
