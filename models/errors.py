"""Domain exceptions for the calendar models.

Every exception raised on purpose by the recurrence engine or the calendar
service derives from CalendarError, so callers can catch the whole family or a
specific kind. The HTTP layer maps each kind to a status code in
api/exceptions.py.
"""

from typing import Any


class CalendarError(Exception):
    """Base class for calendar domain errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotRecurringError(CalendarError):
    """Raised when a recurrence operation targets an event without an active rule.

    Args:
        event_id: ID of the offending event.
    """

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event {event_id} is not a recurring event")


class InvalidRuleError(CalendarError):
    """Raised when a recurrence rule fails validation.

    Args:
        message: Description of the problem.
        errors: Structured validation errors, when pydantic produced them.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class InvalidWindowError(CalendarError):
    """Raised when an expansion window is unparseable or inverted."""


class IterationExhausted(CalendarError):
    """Signals that an expansion hit its iteration safety bound.

    Internal only: the expander catches it, logs it and returns the
    occurrences produced so far.

    Args:
        event_id: ID of the event being expanded.
        limit: The iteration bound that was reached.
    """

    def __init__(self, event_id: str, limit: int):
        self.event_id = event_id
        self.limit = limit
        super().__init__(
            f"Expansion of event {event_id} stopped after {limit} iterations"
        )


class NotFoundError(CalendarError):
    """Raised when a record lookup by ID fails.

    Args:
        kind: Record kind ("Event", "Category", "Participant").
        record_id: The ID that was looked up.
    """

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} with ID {record_id} not found")


class EventNotFoundError(NotFoundError):
    def __init__(self, record_id: str):
        super().__init__("Event", record_id)


class CategoryNotFoundError(NotFoundError):
    def __init__(self, record_id: str):
        super().__init__("Category", record_id)


class ParticipantNotFoundError(NotFoundError):
    def __init__(self, record_id: str):
        super().__init__("Participant", record_id)


class OccurrenceNotFoundError(NotFoundError):
    """Raised when a date is not an occurrence of a recurring event.

    Args:
        event_id: ID of the recurring event.
        day: The requested occurrence date (YYYY-MM-DD).
    """

    def __init__(self, event_id: str, day: str):
        self.event_id = event_id
        self.day = day
        super().__init__("Occurrence", f"{event_id}-{day}")


class DuplicateRecordError(CalendarError):
    """Raised when a create or update would violate a uniqueness rule.

    Args:
        message: Description of the conflict.
    """
