"""Recurrence rule models.

A recurrence rule is a closed tagged variant: one model per frequency, each
carrying only the fields that mean something for that frequency. The
``frequency`` field is the discriminator, and any field that does not belong
to the selected case is rejected instead of silently ignored.

Weekdays follow the 0 = Sunday convention used by the calendar UI, and
``month_of_year`` is zero based (0 = January).
"""

import calendar
from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from models.errors import InvalidRuleError


RecurrenceFrequency = Literal["daily", "weekly", "monthly", "yearly"]
Weekday = Annotated[int, Field(ge=0, le=6)]

FREQUENCIES: tuple[str, ...] = ("daily", "weekly", "monthly", "yearly")


def weekday_index(day: date) -> int:
    """Return the weekday of a date with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month (month is 1 based)."""
    return calendar.monthrange(year, month)[1]


class _RuleBase(BaseModel):
    """Fields shared by every recurrence case.

    Args:
        interval: Repeat every N periods (default: 1).
        end_date: Inclusive last calendar date of the series.
        count: Maximum number of occurrences in the series.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    interval: int = Field(default=1, ge=1, description="Repeat every N periods")
    end_date: Optional[date] = Field(
        default=None, description="Inclusive end of the series"
    )
    count: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of occurrences"
    )

    @field_validator("end_date", mode="before")
    @classmethod
    def coerce_end_date(cls, value: Any) -> Any:
        """Accept full timestamps for end_date and keep only their calendar date.

        Args:
            value: Raw end_date input.

        Returns:
            A date when the input is a datetime or ISO timestamp, otherwise the
            value unchanged for normal date validation.
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            try:
                return datetime.fromisoformat(value).date()
            except ValueError:
                return value
        return value

    @property
    def is_bounded(self) -> bool:
        """Whether the rule carries its own terminating condition."""
        return self.end_date is not None or self.count is not None

    def anchored(self, start: date) -> "_RuleBase":
        """Return the rule with implicit fields filled in from a series start.

        Cases with nothing implicit return themselves.
        """
        return self


class _WeekdayRuleBase(_RuleBase):
    days_of_week: Optional[list[Weekday]] = Field(
        default=None, description="Selected weekdays (0 = Sunday)"
    )

    @field_validator("days_of_week")
    @classmethod
    def normalize_days_of_week(cls, days: Optional[list[int]]) -> Optional[list[int]]:
        """Store weekdays as a sorted set; an empty selection means no filter."""
        if not days:
            return None
        return sorted(set(days))

    @property
    def has_weekday_filter(self) -> bool:
        return self.days_of_week is not None

    def matches_weekday(self, day: date) -> bool:
        """Check whether a date falls on a selected weekday.

        Rules without a weekday filter match every date.
        """
        if self.days_of_week is None:
            return True
        return weekday_index(day) in self.days_of_week


class DailyRule(_WeekdayRuleBase):
    """Repeat every ``interval`` days, or on the selected weekdays.

    When ``days_of_week`` is set the rule steps one day at a time to the next
    selected weekday and ``interval`` is not applied.
    """

    frequency: Literal["daily"] = "daily"


class WeeklyRule(_WeekdayRuleBase):
    """Repeat every ``interval`` weeks, optionally on several weekdays."""

    frequency: Literal["weekly"] = "weekly"


class MonthlyRule(_RuleBase):
    """Repeat every ``interval`` months on ``day_of_month``.

    Args:
        day_of_month: Target day (1-31), clamped to the month's last day.
    """

    frequency: Literal["monthly"] = "monthly"
    day_of_month: Optional[int] = Field(
        default=None, ge=1, le=31, description="Target day of month"
    )

    def anchored(self, start: date) -> "MonthlyRule":
        if self.day_of_month is not None:
            return self
        return self.model_copy(update={"day_of_month": start.day})


class YearlyRule(_RuleBase):
    """Repeat every ``interval`` years on ``month_of_year``/``day_of_month``.

    Args:
        month_of_year: Target month (0-11).
        day_of_month: Target day (1-31), clamped to the month's last day.
    """

    frequency: Literal["yearly"] = "yearly"
    month_of_year: Optional[int] = Field(
        default=None, ge=0, le=11, description="Target month (0 = January)"
    )
    day_of_month: Optional[int] = Field(
        default=None, ge=1, le=31, description="Target day of month"
    )

    def anchored(self, start: date) -> "YearlyRule":
        update: dict[str, int] = {}
        if self.month_of_year is None:
            update["month_of_year"] = start.month - 1
        if self.day_of_month is None:
            update["day_of_month"] = start.day
        if not update:
            return self
        return self.model_copy(update=update)


RecurrenceRule = Annotated[
    Union[DailyRule, WeeklyRule, MonthlyRule, YearlyRule],
    Field(discriminator="frequency"),
]

_rule_adapter: TypeAdapter = TypeAdapter(RecurrenceRule)


def build_rule(data: Any) -> Union[DailyRule, WeeklyRule, MonthlyRule, YearlyRule]:
    """Validate raw input into the matching recurrence case.

    Args:
        data: A mapping with a ``frequency`` key, or an existing rule.

    Returns:
        The validated rule.

    Raises:
        InvalidRuleError: If the frequency is unknown, a value is out of range,
            or a field does not belong to the selected frequency.
    """
    if isinstance(data, _RuleBase):
        return data
    try:
        return _rule_adapter.validate_python(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in errors)
        raise InvalidRuleError(
            f"Invalid recurrence rule ({fields})", errors=errors
        ) from e
