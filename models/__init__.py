"""Calendar data models package.

This package contains the calendar entities, the recurrence rule models,
the recurrence expansion engine and the CalendarService that ties them to
the in-memory record stores.
"""

from models.entities import (
    CalendarEvent,
    Category,
    EventChanges,
    EventNotification,
    OccurrenceInstance,
    Participant,
)
from models.errors import (
    CalendarError,
    InvalidRuleError,
    InvalidWindowError,
    NotFoundError,
    NotRecurringError,
)
from models.expander import RecurrenceExpansion, expand
from models.materializer import materialize
from models.recurrence import (
    DailyRule,
    MonthlyRule,
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
    build_rule,
)
from models.service import CalendarService
from models.stepper import next_occurrence
from models.store import InMemoryStore

__all__ = [
    "CalendarEvent",
    "Category",
    "EventChanges",
    "EventNotification",
    "OccurrenceInstance",
    "Participant",
    "CalendarError",
    "InvalidRuleError",
    "InvalidWindowError",
    "NotFoundError",
    "NotRecurringError",
    "RecurrenceExpansion",
    "expand",
    "materialize",
    "DailyRule",
    "WeeklyRule",
    "MonthlyRule",
    "YearlyRule",
    "RecurrenceRule",
    "build_rule",
    "CalendarService",
    "next_occurrence",
    "InMemoryStore",
]
