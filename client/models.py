"""Client response models for the Calendar Events API client.

These mirror the JSON the server returns. They are deliberately lenient
(recurrence rules are kept as plain dicts) so that the client keeps working
when the server adds fields.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class Notification(BaseModel):
    """Notification setting of an event.

    Attributes:
        id: Notification identifier.
        type: Delivery channel (popup, email, push).
        timing: Minutes before the event.
        message: Notification text.
        is_enabled: Whether active.
    """

    id: str
    type: str = "popup"
    timing: int
    message: str
    is_enabled: bool = True


class Event(BaseModel):
    """A stored calendar event.

    Attributes:
        id: Event identifier.
        title: Event title.
        start_date: Start datetime.
        end_date: End datetime, if any.
        is_recurring: Whether the event repeats.
        recurrence: Recurrence rule, as sent by the server.
        excluded_dates: Dates removed from the series (YYYY-MM-DD).
        parent_event_id: For split-off occurrences, the series they came from.
    """

    id: str
    title: str
    description: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    all_day: bool = False
    color: str
    text_color: str
    location: str | None = None
    category_id: str | None = None
    participant_ids: list[str] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    is_recurring: bool = False
    recurrence: dict[str, Any] | None = None
    excluded_dates: list[str] = Field(default_factory=list)
    parent_event_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Instance(BaseModel):
    """One materialized occurrence of a recurring event.

    Attributes:
        id: ``<event id>-<YYYY-MM-DD>``, stable across queries.
        parent_event_id: The recurring event.
        start_date: Occurrence start.
        end_date: Occurrence end.
    """

    id: str
    parent_event_id: str
    title: str
    description: str | None = None
    start_date: datetime
    end_date: datetime
    all_day: bool = False
    color: str
    text_color: str
    location: str | None = None
    category_id: str | None = None
    participant_ids: list[str] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)


class Category(BaseModel):
    """An event category."""

    id: str
    name: str
    color: str
    icon: str = ""
    is_visible: bool = True
    description: str | None = None


class Participant(BaseModel):
    """A person that can be invited to events."""

    id: str
    name: str
    email: str
    avatar: str | None = None
    role: str | None = None
    department: str | None = None
    status: str = "pending"


class EventListResponse(BaseModel):
    """Response model for event listings.

    Attributes:
        events: Stored events.
        instances: Instances of expanded recurring events.
        count: Total number of events and instances.
    """

    events: list[Event]
    instances: list[Instance] = Field(default_factory=list)
    count: int


class InstancesResponse(BaseModel):
    """Response model for recurring event expansion."""

    event_id: str
    start_date: str
    end_date: str
    instances: list[Instance]
    count: int


class OccurrenceEditResponse(BaseModel):
    """Response model for editing a single occurrence.

    Attributes:
        event: The recurring event, now excluding the edited date.
        occurrence: The standalone event replacing the occurrence.
    """

    event: Event
    occurrence: Event


class DeleteResponse(BaseModel):
    """Response model for deletions."""

    id: str
    deleted: bool = True
    message: str


class RecurrencePreset(BaseModel):
    """A preset recurrence rule offered by the server."""

    label: str
    rule: dict[str, Any]
    description: str


class RuleDescription(BaseModel):
    """A validated recurrence rule and its description."""

    rule: dict[str, Any]
    description: str


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
