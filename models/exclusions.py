"""Exclusion dates and single-occurrence edits.

Both operations act on the base event and return new copies; callers persist
the result (see ``CalendarService``, which does so under a record lock).
"""

import logging
from datetime import date, datetime, timezone
from typing import Union

from models.entities import CalendarEvent, EventChanges, new_id, parse_calendar_date
from models.errors import NotRecurringError
from models.materializer import materialize

logger = logging.getLogger(__name__)


def add_exclusion(event: CalendarEvent, day: Union[str, date]) -> CalendarEvent:
    """Return a copy of the event with ``day`` excluded from the series.

    Adding a date that is already excluded returns an unchanged copy.

    Args:
        event: The recurring base event.
        day: Occurrence date to exclude.

    Returns:
        The updated event.

    Raises:
        NotRecurringError: If the event is not recurring.
        ValueError: If ``day`` is not a valid calendar date.
    """
    if not event.is_recurring or event.recurrence is None:
        raise NotRecurringError(event.id)

    key = parse_calendar_date(day)
    if key in event.excluded_dates:
        return event.model_copy(deep=True)
    return event.model_copy(
        update={
            "excluded_dates": [*event.excluded_dates, key],
            "updated_at": datetime.now(timezone.utc),
        },
        deep=True,
    )


def edit_occurrence(
    event: CalendarEvent, day: Union[str, date], changes: EventChanges
) -> tuple[CalendarEvent, CalendarEvent]:
    """Split one occurrence off a series as a standalone event.

    The standalone event starts from the materialized occurrence with
    ``changes`` applied, gets a fresh id, and points back at the series
    through ``parent_event_id``. The series gains an exclusion for ``day``.

    Args:
        event: The recurring base event.
        day: Date of the occurrence to edit.
        changes: Fields to override on the standalone event.

    Returns:
        Tuple of (updated base event, standalone override).

    Raises:
        NotRecurringError: If the event is not recurring.
        ValueError: If ``day`` is invalid or the changed fields are invalid.
    """
    updated = add_exclusion(event, day)

    occurrence_day = date.fromisoformat(parse_calendar_date(day))
    occurrence = datetime.combine(occurrence_day, event.start_date.timetz())
    instance = materialize(event, occurrence)

    fields = instance.model_dump(
        exclude={"id", "parent_event_id", "is_recurring", "recurrence"}
    )
    fields.update(changes.applied())
    override = CalendarEvent.model_validate(
        {
            **fields,
            "id": new_id(),
            "parent_event_id": event.id,
            "is_recurring": False,
        }
    )
    logger.info(
        f"Split occurrence {occurrence_day.isoformat()} of event {event.id} "
        f"into event {override.id}"
    )
    return updated, override
