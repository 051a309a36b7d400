"""Recurrence expansion.

Turns a recurring event and a query window into the occurrence start times
that fall inside the window. The expansion is lazy and restartable: each
``iter()`` walks the stored rule from scratch and never mutates the event.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from config import get_settings
from models.entities import CalendarEvent, OccurrenceInstance
from models.errors import InvalidWindowError, IterationExhausted, NotRecurringError
from models.materializer import materialize
from models.recurrence import DailyRule, WeeklyRule
from models.stepper import next_occurrence

logger = logging.getLogger(__name__)

WindowBound = Union[date, datetime, str]


def to_window_date(value: WindowBound, name: str = "window bound") -> date:
    """Convert a window bound to its calendar date.

    Args:
        value: A date, datetime, or ISO date/timestamp string.
        name: Name of the bound, used in the error message.

    Returns:
        The calendar date of the bound.

    Raises:
        InvalidWindowError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) > 10:
                return datetime.fromisoformat(text).date()
            return date.fromisoformat(text)
        except ValueError:
            pass
    raise InvalidWindowError(f"Invalid {name}: {value!r}")


def _period(rule) -> Optional[tuple[int, int]]:
    """Return (period in days, occurrences per period) for fixed-period rules.

    Monthly and yearly rules have no fixed period in days and return None.
    """
    if isinstance(rule, DailyRule):
        if rule.days_of_week is None:
            return rule.interval, 1
        return 7, len(rule.days_of_week)
    if isinstance(rule, WeeklyRule):
        if rule.days_of_week is None:
            return 7 * rule.interval, 1
        return 7 * rule.interval, len(rule.days_of_week)
    return None


class RecurrenceExpansion:
    """Occurrence start datetimes of one event inside an inclusive window.

    Iterating yields strictly increasing datetimes carrying the event's time
    of day. Occurrences before the window still count toward ``count``.

    Args:
        event: The recurring base event.
        window_start: First calendar date of the window.
        window_end: Last calendar date of the window.
        max_iterations: Stepper calls allowed per iteration pass.
    """

    def __init__(
        self,
        event: CalendarEvent,
        window_start: date,
        window_end: date,
        max_iterations: int,
    ):
        self.event = event
        self.rule = event.recurrence.anchored(event.start_date.date())
        self.window_start = window_start
        self.window_end = window_end
        self.max_iterations = max_iterations

    @property
    def series_start(self) -> date:
        """First occurrence of the series.

        The event's start date, moved forward to the first selected weekday
        when the rule filters by weekday.
        """
        start = self.event.start_date.date()
        if getattr(self.rule, "days_of_week", None) is None:
            return start
        for _ in range(7):
            if self.rule.matches_weekday(start):
                break
            start += timedelta(days=1)
        return start

    def __iter__(self) -> Iterator[datetime]:
        start_time = self.event.start_date.timetz()
        produced = 0
        try:
            for day in self.dates():
                produced += 1
                yield datetime.combine(day, start_time)
        except IterationExhausted as e:
            logger.warning(f"{e.message}; returning {produced} occurrences")
            return
        logger.debug(
            f"Expanded event {self.event.id}: {produced} occurrences "
            f"in {self.window_start}..{self.window_end}"
        )

    def dates(self) -> Iterator[date]:
        """Yield occurrence dates inside the window.

        Raises:
            IterationExhausted: If the stepper is called more than
                ``max_iterations`` times.
        """
        rule = self.rule
        excluded = set(self.event.excluded_dates)
        current, emitted = self._skip_to_window()
        iterations = 0

        while current <= self.window_end:
            if rule.end_date is not None and current > rule.end_date:
                return
            if current.isoformat() not in excluded:
                if rule.count is not None and emitted >= rule.count:
                    return
                emitted += 1
                if current >= self.window_start:
                    yield current

            iterations += 1
            if iterations > self.max_iterations:
                raise IterationExhausted(self.event.id, self.max_iterations)
            current = next_occurrence(current, rule)

    def instances(self) -> Iterator[OccurrenceInstance]:
        """Yield a materialized instance for each occurrence in the window."""
        for occurrence in self:
            yield materialize(self.event, occurrence)

    def _skip_to_window(self) -> tuple[date, int]:
        """Jump over whole periods that end before the window.

        Returns:
            The occurrence to resume walking from and the number of
            non-excluded occurrences that precede it.
        """
        start = self.series_start
        period = _period(self.rule)
        if period is None or self.window_start <= start:
            return start, 0

        length, per_period = period
        periods = (self.window_start - start).days // length
        resume = start + timedelta(days=periods * length)
        skipped_exclusions = sum(
            1
            for value in self.event.excluded_dates
            if start <= date.fromisoformat(value) < resume
            and self._is_occurrence(date.fromisoformat(value), start, length)
        )
        return resume, periods * per_period - skipped_exclusions

    def _is_occurrence(self, day: date, start: date, length: int) -> bool:
        """Check whether ``day`` is an occurrence of a fixed-period series."""
        target = start + timedelta(days=(day - start).days % length)
        probe = start
        while probe < target:
            probe = next_occurrence(probe, self.rule)
        return probe == target


def expand(
    event: CalendarEvent,
    window_start: WindowBound,
    window_end: WindowBound,
    max_iterations: Optional[int] = None,
) -> RecurrenceExpansion:
    """Expand a recurring event over an inclusive window.

    Args:
        event: The base event; must be recurring with a rule.
        window_start: Window start (compared by calendar date).
        window_end: Window end (compared by calendar date, inclusive).
        max_iterations: Safety bound; defaults to the configured value.

    Returns:
        A restartable iterable of occurrence start datetimes.

    Raises:
        NotRecurringError: If the event has no active recurrence rule.
        InvalidWindowError: If a bound is unparseable or the window is inverted.
    """
    if not event.is_recurring or event.recurrence is None:
        raise NotRecurringError(event.id)

    start = to_window_date(window_start, "start_date")
    end = to_window_date(window_end, "end_date")
    if end < start:
        raise InvalidWindowError(
            f"Window end {end.isoformat()} is before window start {start.isoformat()}"
        )

    if max_iterations is None:
        max_iterations = get_settings().max_iterations
    return RecurrenceExpansion(event, start, end, max_iterations)
