"""Age arithmetic on birthdays."""

from datetime import date


def calculate_age(birthday: date, today: date | None = None) -> int:
    """Calculate age in whole years on ``today``."""
    today = today or date.today()
    age = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        age -= 1
    return age


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def birthday_window(min_age: int, max_age: int, today: date | None = None) -> tuple[date, date]:
    """
    Birthday bounds for people aged min_age..max_age (inclusive) on ``today``.

    Returns (earliest_exclusive, latest_inclusive): a birthday qualifies when
    earliest_exclusive < birthday <= latest_inclusive.
    """
    today = today or date.today()
    latest = years_before(today, min_age)
    earliest_exclusive = years_before(today, max_age + 1)
    return earliest_exclusive, latest
