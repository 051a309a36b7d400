"""Event endpoints.

Provides REST API for managing calendar events - creating, updating, deleting
and searching events, and for working with recurring series: expanding a
series into instances, excluding dates, and editing or deleting a single
occurrence.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from api.dependencies import CalendarServiceDep
from api.models import DateRequest, DeleteResponse, ListResponse
from models.entities import (
    CalendarEvent,
    EventChanges,
    EventNotification,
    OccurrenceInstance,
)

router = APIRouter(
    prefix="/events",
    tags=["events"],
)


# Request Models


class CreateEventRequest(BaseModel):
    """Request to create a new event.

    Args:
        title: Event title.
        description: Event description.
        start_date: Start datetime.
        end_date: End datetime.
        all_day: Whether this is an all-day event.
        color: Event color (hex).
        text_color: Text color (hex).
        location: Event location.
        category_id: Category to file the event under.
        participant_ids: Participants to invite; unknown IDs are ignored.
        notifications: Notification settings.
        recurrence: Recurrence rule; makes the event recurring.

    Dates are excluded from a series through the exclude and occurrence
    endpoints, never by setting them directly.
    """

    title: str = Field(description="Event title")
    description: Optional[str] = Field(default=None, description="Event description")
    start_date: datetime = Field(description="Start datetime")
    end_date: Optional[datetime] = Field(default=None, description="End datetime")
    all_day: bool = Field(default=False, description="Is all-day event")
    color: Optional[str] = Field(default=None, description="Event color")
    text_color: Optional[str] = Field(default=None, description="Text color")
    location: Optional[str] = Field(default=None, description="Event location")
    category_id: Optional[str] = Field(default=None, description="Category ID")
    participant_ids: Optional[list[str]] = Field(
        default=None, description="Participant IDs"
    )
    notifications: Optional[list[EventNotification]] = Field(
        default=None, description="Notification settings"
    )
    recurrence: Optional[dict[str, Any]] = Field(
        default=None, description="Recurrence rule"
    )


class UpdateEventRequest(BaseModel):
    """Request to update an existing event.

    Only fields present in the request body are changed. Sending
    ``"recurrence": null`` turns a recurring event into a single event.
    """

    title: Optional[str] = Field(default=None, description="Event title")
    description: Optional[str] = Field(default=None, description="Event description")
    start_date: Optional[datetime] = Field(default=None, description="Start datetime")
    end_date: Optional[datetime] = Field(default=None, description="End datetime")
    all_day: Optional[bool] = Field(default=None, description="Is all-day event")
    color: Optional[str] = Field(default=None, description="Event color")
    text_color: Optional[str] = Field(default=None, description="Text color")
    location: Optional[str] = Field(default=None, description="Event location")
    category_id: Optional[str] = Field(default=None, description="Category ID")
    participant_ids: Optional[list[str]] = Field(
        default=None, description="Participant IDs"
    )
    notifications: Optional[list[EventNotification]] = Field(
        default=None, description="Notification settings"
    )
    recurrence: Optional[dict[str, Any]] = Field(
        default=None, description="Recurrence rule"
    )


# Response Models


class EventListResponse(BaseModel):
    """Response model for event listings.

    Args:
        events: Stored events matching the filters, ordered by start.
        instances: Occurrence instances of expanded recurring events, ordered by start.
        count: Total number of events and instances returned.
    """

    events: list[CalendarEvent]
    instances: list[OccurrenceInstance] = Field(default_factory=list)
    count: int


class EventInstancesResponse(BaseModel):
    """Response model for recurring event expansion.

    Args:
        event_id: ID of the recurring event.
        start_date: Window start as requested.
        end_date: Window end as requested.
        instances: Materialized occurrences inside the window.
        count: Number of instances.
    """

    event_id: str
    start_date: str
    end_date: str
    instances: list[OccurrenceInstance]
    count: int


class OccurrenceEditResponse(BaseModel):
    """Response model for editing one occurrence.

    Args:
        event: The recurring event, now excluding the edited date.
        occurrence: The standalone event that replaces the occurrence.
    """

    event: CalendarEvent
    occurrence: CalendarEvent


# Route Handlers


@router.post("", response_model=CalendarEvent, status_code=201)
async def create_event(request: CreateEventRequest, service: CalendarServiceDep):
    """Create a new event.

    Args:
        request: Event details; include ``recurrence`` for a recurring event.
        service: Calendar service dependency.

    Returns:
        The created event.
    """
    return service.create_event(request.model_dump(exclude_none=True))


@router.get("", response_model=EventListResponse)
async def list_events(
    service: CalendarServiceDep,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    category_ids: Annotated[Optional[list[str]], Query()] = None,
    include_recurring: bool = True,
    expand_recurring: bool = False,
):
    """List events with optional filters.

    The date range applies only when both ``start_date`` and ``end_date``
    are given. With ``expand_recurring`` recurring events are returned as
    instances inside the range instead of as series.

    Args:
        service: Calendar service dependency.
        start_date: Range start (YYYY-MM-DD).
        end_date: Range end (YYYY-MM-DD), inclusive.
        category_ids: Only events in these categories.
        include_recurring: Whether recurring events are included.
        expand_recurring: Whether to expand recurring events.

    Returns:
        Matching events and instances.
    """
    results = service.list_events(
        start_date=start_date,
        end_date=end_date,
        category_ids=category_ids,
        include_recurring=include_recurring,
        expand_recurring=expand_recurring,
    )
    events = [r for r in results if isinstance(r, CalendarEvent)]
    instances = [r for r in results if isinstance(r, OccurrenceInstance)]
    return EventListResponse(events=events, instances=instances, count=len(results))


@router.get("/search", response_model=ListResponse[CalendarEvent])
async def search_events(service: CalendarServiceDep, q: str = ""):
    """Search events by title or description.

    Args:
        service: Calendar service dependency.
        q: Text to look for (case-insensitive).

    Returns:
        Matching events.
    """
    return ListResponse[CalendarEvent].of(service.search_events(q))


@router.get("/category/{category_id}", response_model=ListResponse[CalendarEvent])
async def events_by_category(category_id: str, service: CalendarServiceDep):
    """List the events filed under one category."""
    return ListResponse[CalendarEvent].of(service.events_by_category(category_id))


@router.get("/{event_id}", response_model=CalendarEvent)
async def get_event(event_id: str, service: CalendarServiceDep):
    """Get a single event by ID."""
    return service.get_event(event_id)


@router.patch("/{event_id}", response_model=CalendarEvent)
async def update_event(
    event_id: str, request: UpdateEventRequest, service: CalendarServiceDep
):
    """Update an event.

    Args:
        event_id: Event to update.
        request: Fields to change.
        service: Calendar service dependency.

    Returns:
        The updated event.
    """
    return service.update_event(event_id, request.model_dump(exclude_unset=True))


@router.delete("/{event_id}", response_model=DeleteResponse)
async def delete_event(event_id: str, service: CalendarServiceDep):
    """Delete an event and any occurrences split off from it."""
    deleted = service.delete_event(event_id)
    return DeleteResponse(id=deleted.id, message=f"Deleted event: {deleted.title}")


@router.get("/{event_id}/instances", response_model=EventInstancesResponse)
async def get_event_instances(
    event_id: str, start_date: str, end_date: str, service: CalendarServiceDep
):
    """Expand a recurring event into instances inside a date range.

    Args:
        event_id: Recurring event to expand.
        start_date: Range start (YYYY-MM-DD), inclusive.
        end_date: Range end (YYYY-MM-DD), inclusive.
        service: Calendar service dependency.

    Returns:
        The instances in increasing start order.
    """
    instances = service.expand_recurring_event(event_id, start_date, end_date)
    return EventInstancesResponse(
        event_id=event_id,
        start_date=start_date,
        end_date=end_date,
        instances=instances,
        count=len(instances),
    )


@router.post("/{event_id}/exclude", response_model=CalendarEvent)
async def exclude_date(
    event_id: str, request: DateRequest, service: CalendarServiceDep
):
    """Exclude one date from a recurring event's series.

    Excluding a date twice is not an error.
    """
    return service.add_exclusion_date(event_id, request.date)


@router.put("/{event_id}/occurrences/{occurrence_date}", response_model=OccurrenceEditResponse)
async def edit_occurrence(
    event_id: str,
    occurrence_date: str,
    changes: EventChanges,
    service: CalendarServiceDep,
):
    """Edit a single occurrence of a recurring event.

    The occurrence is excluded from the series and replaced by a standalone
    event carrying the changes.

    Args:
        event_id: Recurring event.
        occurrence_date: Date of the occurrence (YYYY-MM-DD).
        changes: Fields to change on the occurrence.
        service: Calendar service dependency.

    Returns:
        The updated series and the new standalone event.
    """
    event, occurrence = service.edit_occurrence(event_id, occurrence_date, changes)
    return OccurrenceEditResponse(event=event, occurrence=occurrence)


@router.delete("/{event_id}/occurrences/{occurrence_date}", response_model=CalendarEvent)
async def delete_occurrence(
    event_id: str, occurrence_date: str, service: CalendarServiceDep
):
    """Delete a single occurrence of a recurring event by excluding its date."""
    return service.delete_occurrence(event_id, occurrence_date)
