"""Calendar Events API Client Library.

This module provides a typed Python client for the Calendar Events REST API.

Example:
    Synchronous usage::

        from client import CalendarClient

        with CalendarClient(base_url="http://localhost:8000") as client:
            event = client.events.create(
                title="Team sync",
                start_date=datetime(2024, 1, 1, 10, 0),
                recurrence={"frequency": "weekly", "days_of_week": [1]},
            )
            client.events.exclude_date(event.id, "2024-01-15")

Exports:
    CalendarClient: Synchronous client for the Calendar Events API.

    Exceptions:
        CalendarClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Resource not found (HTTP 404).
        ConflictError: State conflict (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._categories import CategoriesClient
from client._events import EventsClient
from client._participants import ParticipantsClient
from client.client import CalendarClient
from client.exceptions import (
    APIError,
    CalendarClientError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    Category,
    DeleteResponse,
    Event,
    EventListResponse,
    HealthResponse,
    Instance,
    InstancesResponse,
    Notification,
    OccurrenceEditResponse,
    Participant,
    RecurrencePreset,
    RuleDescription,
)

__all__ = [
    "CalendarClient",
    "EventsClient",
    "CategoriesClient",
    "ParticipantsClient",
    "CalendarClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    "Category",
    "DeleteResponse",
    "Event",
    "EventListResponse",
    "HealthResponse",
    "Instance",
    "InstancesResponse",
    "Notification",
    "OccurrenceEditResponse",
    "Participant",
    "RecurrencePreset",
    "RuleDescription",
]
