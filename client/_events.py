"""Events sub-client for the Calendar Events API (/events/*, /recurrence/*)."""

from datetime import date, datetime
from typing import Any

from client._base import BaseClient
from client.models import (
    DeleteResponse,
    Event,
    EventListResponse,
    Instance,
    InstancesResponse,
    OccurrenceEditResponse,
    RecurrencePreset,
    RuleDescription,
)


def _day(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value


class EventsClient(BaseClient):
    """Synchronous client for event endpoints (/events/*).

    Example:
        with CalendarClient() as client:
            standup = client.events.create(
                title="Standup",
                start_date=datetime(2024, 1, 1, 9, 0),
                end_date=datetime(2024, 1, 1, 9, 15),
                recurrence={"frequency": "weekly", "days_of_week": [1, 2, 3, 4, 5]},
            )
            week = client.events.instances(standup.id, "2024-01-01", "2024-01-07")
            client.events.delete_occurrence(standup.id, "2024-01-03")
    """

    _BASE_PATH = "/events"

    def create(
        self,
        title: str,
        start_date: datetime,
        end_date: datetime | None = None,
        recurrence: dict[str, Any] | None = None,
        **fields: Any,
    ) -> Event:
        """Create an event.

        Args:
            title: Event title.
            start_date: Start datetime.
            end_date: End datetime.
            recurrence: Recurrence rule, e.g. ``{"frequency": "daily"}``.
            **fields: Any other event field (description, color, location,
                category_id, participant_ids, notifications).

        Returns:
            The created event.

        Raises:
            ValidationError: If a field or the recurrence rule is invalid.
            NotFoundError: If ``category_id`` does not exist.
        """
        body: dict[str, Any] = {"title": title, "start_date": start_date, **fields}
        if end_date is not None:
            body["end_date"] = end_date
        if recurrence is not None:
            body["recurrence"] = recurrence
        return Event(**self._post(self._BASE_PATH, json=body))

    def get(self, event_id: str) -> Event:
        """Get an event by ID.

        Raises:
            NotFoundError: If the event does not exist.
        """
        return Event(**self._get(self._path(event_id)))

    def query(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        category_ids: list[str] | None = None,
        include_recurring: bool = True,
        expand_recurring: bool = False,
    ) -> EventListResponse:
        """List events with optional filters.

        Args:
            start_date: Range start; used only together with end_date.
            end_date: Range end, inclusive.
            category_ids: Only events in these categories.
            include_recurring: Whether recurring events are included.
            expand_recurring: Return recurring events as instances in the range.

        Returns:
            The events and instances.
        """
        params: dict[str, Any] = {
            "start_date": start_date,
            "end_date": end_date,
            "category_ids": category_ids,
            "include_recurring": include_recurring,
            "expand_recurring": expand_recurring,
        }
        return EventListResponse(**self._get(self._BASE_PATH, params=params))

    def search(self, query: str) -> list[Event]:
        """Search events by title or description.

        Raises:
            APIError: If the query is blank (HTTP 400).
        """
        data = self._get(self._path("search"), params={"q": query})
        return [Event(**item) for item in data["items"]]

    def by_category(self, category_id: str) -> list[Event]:
        data = self._get(self._path("category", category_id))
        return [Event(**item) for item in data["items"]]

    def update(self, event_id: str, **fields: Any) -> Event:
        """Update an event. Pass ``recurrence=None`` to stop it repeating.

        Raises:
            NotFoundError: If the event does not exist.
            ValidationError: If a field or the recurrence rule is invalid.
        """
        return Event(**self._patch(self._path(event_id), json=fields))

    def delete(self, event_id: str) -> DeleteResponse:
        """Delete an event together with occurrences split off from it."""
        return DeleteResponse(**self._delete(self._path(event_id)))

    def instances(
        self, event_id: str, start_date: date | str, end_date: date | str
    ) -> list[Instance]:
        """Expand a recurring event inside an inclusive date range.

        Raises:
            NotFoundError: If the event does not exist.
            APIError: If the event is not recurring or the range is invalid (HTTP 400).
        """
        data = self._get(
            self._path(event_id, "instances"),
            params={"start_date": start_date, "end_date": end_date},
        )
        return InstancesResponse(**data).instances

    def exclude_date(self, event_id: str, day: date | str) -> Event:
        """Remove one date from a recurring event's series (idempotent)."""
        return Event(**self._post(self._path(event_id, "exclude"), json={"date": _day(day)}))

    def edit_occurrence(
        self, event_id: str, day: date | str, **changes: Any
    ) -> OccurrenceEditResponse:
        """Replace one occurrence with a standalone event carrying ``changes``.

        Raises:
            NotFoundError: If the event does not exist or ``day`` is not an occurrence.
        """
        data = self._put(self._path(event_id, "occurrences", _day(day)), json=changes)
        return OccurrenceEditResponse(**data)

    def delete_occurrence(self, event_id: str, day: date | str) -> Event:
        """Remove one occurrence from a series."""
        return Event(**self._delete(self._path(event_id, "occurrences", _day(day))))

    def presets(self) -> list[RecurrencePreset]:
        """List the preset recurrence rules."""
        return [RecurrencePreset(**item) for item in self._get("/recurrence/presets")]

    def describe_rule(self, rule: dict[str, Any]) -> RuleDescription:
        """Validate a recurrence rule on the server and describe it.

        Raises:
            ValidationError: If the rule is invalid.
        """
        return RuleDescription(**self._post("/recurrence/describe", json=rule))
