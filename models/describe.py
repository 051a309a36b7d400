"""Human-readable recurrence descriptions and the preset rules offered to users."""

from models.recurrence import (
    DailyRule,
    MonthlyRule,
    WeeklyRule,
    YearlyRule,
    build_rule,
)

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

RECURRENCE_PRESETS: tuple[tuple[str, dict], ...] = (
    ("Daily", {"frequency": "daily", "interval": 1}),
    ("Weekly", {"frequency": "weekly", "interval": 1}),
    ("Monthly", {"frequency": "monthly", "interval": 1}),
    ("Yearly", {"frequency": "yearly", "interval": 1}),
    ("Weekdays (Mon-Fri)", {"frequency": "weekly", "interval": 1, "days_of_week": [1, 2, 3, 4, 5]}),
    ("Weekends (Sat-Sun)", {"frequency": "weekly", "interval": 1, "days_of_week": [0, 6]}),
    ("Every 2 weeks", {"frequency": "weekly", "interval": 2}),
    ("Every 3 months", {"frequency": "monthly", "interval": 3}),
)


def ordinal(day: int) -> str:
    """Format a day number with its English ordinal suffix (1st, 2nd, 11th)."""
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _repeat(rule, single: str, plural: str) -> str:
    if rule.interval == 1:
        return single
    return f"Every {rule.interval} {plural}"


def _weekdays(days: list[int]) -> str:
    return ", ".join(DAY_NAMES[day] for day in days)


def _end_condition(rule) -> str:
    text = ""
    if rule.count is not None:
        text += f", {rule.count} time" + ("s" if rule.count > 1 else "")
    if rule.end_date is not None:
        text += f", until {rule.end_date.isoformat()}"
    return text


def describe_rule(rule) -> str:
    """Describe a recurrence rule in words.

    Examples: "Daily", "Every 2 weeks on Monday, Friday",
    "Monthly on the 15th", "Yearly on January 1st, 5 times".

    Args:
        rule: A recurrence rule or a mapping accepted by ``build_rule``.

    Returns:
        The description.

    Raises:
        InvalidRuleError: If ``rule`` is a mapping that fails validation.
    """
    rule = build_rule(rule)

    if isinstance(rule, DailyRule):
        if rule.days_of_week is not None:
            text = f"Daily on {_weekdays(rule.days_of_week)}"
        else:
            text = _repeat(rule, "Daily", "days")
    elif isinstance(rule, WeeklyRule):
        text = _repeat(rule, "Weekly", "weeks")
        if rule.days_of_week is not None:
            text = f"{text} on {_weekdays(rule.days_of_week)}"
    elif isinstance(rule, MonthlyRule):
        text = _repeat(rule, "Monthly", "months")
        if rule.day_of_month is not None:
            text = f"{text} on the {ordinal(rule.day_of_month)}"
    elif isinstance(rule, YearlyRule):
        text = _repeat(rule, "Yearly", "years")
        if rule.month_of_year is not None and rule.day_of_month is not None:
            text = f"{text} on {MONTH_NAMES[rule.month_of_year]} {ordinal(rule.day_of_month)}"
        elif rule.month_of_year is not None:
            text = f"{text} in {MONTH_NAMES[rule.month_of_year]}"
        elif rule.day_of_month is not None:
            text = f"{text} on the {ordinal(rule.day_of_month)}"
    else:
        text = "Custom recurrence"

    return text + _end_condition(rule)


def recurrence_presets() -> list[dict]:
    """Return the preset rules with their labels and descriptions.

    Returns:
        List of dicts with ``label``, ``rule`` and ``description`` keys.
    """
    presets = []
    for label, data in RECURRENCE_PRESETS:
        rule = build_rule(data)
        presets.append(
            {
                "label": label,
                "rule": rule.model_dump(exclude_none=True),
                "description": describe_rule(rule),
            }
        )
    return presets
