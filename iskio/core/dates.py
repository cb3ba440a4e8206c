import calendar
from datetime import date, datetime


def date_key(value: date | str) -> str:
    """YYYY-MM-DD for a date, or the first ten characters of an ISO string."""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()[:10]


def parse_date_key(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def sunday_first_weekday(day: date) -> int:
    """0=Sunday..6=Saturday."""
    return day.isoweekday() % 7


def month_bounds(month: date) -> tuple[date, date]:
    last = calendar.monthrange(month.year, month.month)[1]
    return date(month.year, month.month, 1), date(month.year, month.month, last)
