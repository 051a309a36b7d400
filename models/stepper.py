"""Occurrence stepping for recurrence rules.

``next_occurrence`` computes the occurrence that follows a given one. It works
on calendar dates only; the expander restores the time of day afterwards.
"""

from datetime import date, timedelta

from models.recurrence import (
    DailyRule,
    MonthlyRule,
    WeeklyRule,
    YearlyRule,
    days_in_month,
    weekday_index,
)


def _add_months(current: date, months: int, day: int) -> date:
    """Move forward by whole months, clamping the day to the target month."""
    month_index = current.month - 1 + months
    year = current.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day, days_in_month(year, month)))


def _next_daily(current: date, rule: DailyRule) -> date:
    if rule.days_of_week is None:
        return current + timedelta(days=rule.interval)

    # Interval is not applied when a weekday filter is present.
    result = current + timedelta(days=1)
    for _ in range(6):
        if weekday_index(result) in rule.days_of_week:
            break
        result += timedelta(days=1)
    return result


def _next_weekly(current: date, rule: WeeklyRule) -> date:
    if rule.days_of_week is None:
        return current + timedelta(weeks=rule.interval)

    weekday = weekday_index(current)
    for day in rule.days_of_week:
        if day > weekday:
            return current + timedelta(days=day - weekday)

    # Wrap to the first selected weekday of the week `interval` weeks later.
    ahead = (7 - weekday) + rule.days_of_week[0] + 7 * (rule.interval - 1)
    return current + timedelta(days=ahead)


def _next_monthly(current: date, rule: MonthlyRule) -> date:
    day = rule.day_of_month if rule.day_of_month is not None else current.day
    return _add_months(current, rule.interval, day)


def _next_yearly(current: date, rule: YearlyRule) -> date:
    year = current.year + rule.interval
    month = rule.month_of_year + 1 if rule.month_of_year is not None else current.month
    day = rule.day_of_month if rule.day_of_month is not None else current.day
    return date(year, month, min(day, days_in_month(year, month)))


def next_occurrence(current: date, rule) -> date:
    """Return the occurrence date that follows ``current`` under ``rule``.

    The result is always strictly later than ``current`` for every valid rule.

    Args:
        current: The current occurrence date.
        rule: A validated recurrence rule.

    Returns:
        The next occurrence date.

    Raises:
        TypeError: If ``rule`` is not one of the recurrence rule cases.
    """
    if isinstance(rule, DailyRule):
        return _next_daily(current, rule)
    if isinstance(rule, WeeklyRule):
        return _next_weekly(current, rule)
    if isinstance(rule, MonthlyRule):
        return _next_monthly(current, rule)
    if isinstance(rule, YearlyRule):
        return _next_yearly(current, rule)
    raise TypeError(f"Unsupported recurrence rule: {type(rule).__name__}")
