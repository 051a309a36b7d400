"""Build occurrence instances from a base event."""

from datetime import date, datetime

from models.entities import CalendarEvent, OccurrenceInstance


def instance_id(event_id: str, occurrence: date) -> str:
    """Return the stable instance id for one occurrence of a series."""
    if isinstance(occurrence, datetime):
        occurrence = occurrence.date()
    return f"{event_id}-{occurrence.isoformat()}"


def materialize(event: CalendarEvent, occurrence: datetime) -> OccurrenceInstance:
    """Pin a copy of the base event to a single occurrence.

    Display fields are deep-copied so that changing the instance never
    changes the base event. The end keeps the base event's duration.

    Args:
        event: The recurring base event.
        occurrence: Start datetime of the occurrence.

    Returns:
        The materialized instance.
    """
    return OccurrenceInstance(
        id=instance_id(event.id, occurrence),
        parent_event_id=event.id,
        title=event.title,
        description=event.description,
        start_date=occurrence,
        end_date=occurrence + event.duration,
        all_day=event.all_day,
        color=event.color,
        text_color=event.text_color,
        location=event.location,
        category_id=event.category_id,
        participant_ids=list(event.participant_ids),
        notifications=[n.model_copy(deep=True) for n in event.notifications],
    )
