from datetime import date, timedelta

GESTATION_DAYS = 280
MAX_PREGNANCY_WEEK = 42


def due_date(lmp: date) -> date:
    """Estimated due date: 280 days after the last menstrual period."""
    return lmp + timedelta(days=GESTATION_DAYS)


def pregnancy_week(lmp: date, today: date) -> int:
    week = (today - lmp).days // 7 + 1
    return min(max(week, 1), MAX_PREGNANCY_WEEK)


def trimester(week: int) -> int:
    if week <= 12:
        return 1
    if week <= 27:
        return 2
    return 3


def days_remaining(due: date, today: date) -> int:
    return max((due - today).days, 0)
