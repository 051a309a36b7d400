"""Calendar service.

CalendarService is the single entry point used by the HTTP layer. It owns the
record stores (injected, so tests can share or pre-fill them) and wires the
recurrence engine to them: expansion reads events from the store, and the
exclusion/edit operations write back through ``InMemoryStore.modify`` so that
concurrent updates to the same event never lose each other's changes.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional, Union

from models.entities import (
    CalendarEvent,
    Category,
    EventChanges,
    OccurrenceInstance,
    Participant,
    ParticipantStatus,
    parse_calendar_date,
)
from models.errors import (
    CategoryNotFoundError,
    DuplicateRecordError,
    EventNotFoundError,
    InvalidWindowError,
    NotRecurringError,
    OccurrenceNotFoundError,
    ParticipantNotFoundError,
)
from models.exclusions import add_exclusion, edit_occurrence
from models.expander import WindowBound, expand, to_window_date
from models.recurrence import build_rule
from models.store import InMemoryStore

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: tuple[dict[str, Any], ...] = (
    {
        "name": "Personal",
        "color": "#dcff00",
        "icon": "👤",
        "description": "Personal events and appointments",
    },
    {
        "name": "Work",
        "color": "#5cffe4",
        "icon": "💼",
        "description": "Work meetings and deadlines",
    },
    {
        "name": "Family",
        "color": "#c58fff",
        "icon": "👨‍👩‍👧‍👦",
        "description": "Family gatherings and events",
    },
    {
        "name": "Health",
        "color": "#2dd55b",
        "icon": "🏥",
        "description": "Medical appointments and fitness",
    },
    {
        "name": "Education",
        "color": "#ffc409",
        "icon": "🎓",
        "description": "Classes, courses, and learning",
    },
    {
        "name": "Social",
        "color": "#c5000f",
        "icon": "🎉",
        "description": "Social events and parties",
    },
)

EventOrInstance = Union[CalendarEvent, OccurrenceInstance]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _sort_key(event: EventOrInstance) -> datetime:
    # Wall-clock ordering; naive and aware datetimes may be mixed in a listing.
    return event.start_date.replace(tzinfo=None)


def _ensure_email_free(participant: Participant, others: Iterable[Participant]) -> None:
    if any(other.email == participant.email for other in others):
        raise DuplicateRecordError(f"Email {participant.email} is already in use")


class CalendarService:
    """Events, categories and participants, plus recurrence operations.

    Args:
        events: Store for calendar events.
        categories: Store for categories.
        participants: Store for participants.
        max_iterations: Expansion safety bound; None uses the configured value.
    """

    def __init__(
        self,
        events: Optional[InMemoryStore[CalendarEvent]] = None,
        categories: Optional[InMemoryStore[Category]] = None,
        participants: Optional[InMemoryStore[Participant]] = None,
        max_iterations: Optional[int] = None,
    ):
        self.events = events if events is not None else InMemoryStore(EventNotFoundError)
        self.categories = (
            categories if categories is not None else InMemoryStore(CategoryNotFoundError)
        )
        self.participants = (
            participants
            if participants is not None
            else InMemoryStore(ParticipantNotFoundError)
        )
        self.max_iterations = max_iterations

    # ===== Recurrence =====

    def expand_recurring_event(
        self, event_id: str, start_date: WindowBound, end_date: WindowBound
    ) -> list[OccurrenceInstance]:
        """Materialize the occurrences of a recurring event inside a window.

        Args:
            event_id: ID of the recurring event.
            start_date: Inclusive window start.
            end_date: Inclusive window end.

        Returns:
            Instances in increasing start order.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotRecurringError: If the event is not recurring.
            InvalidWindowError: If the window is invalid.
        """
        event = self.events.get(event_id)
        return list(
            expand(event, start_date, end_date, self.max_iterations).instances()
        )

    def add_exclusion_date(self, event_id: str, day: Union[str, date]) -> CalendarEvent:
        """Suppress one date from a recurring event's series.

        Idempotent: excluding an already excluded date changes nothing.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotRecurringError: If the event is not recurring.
        """
        updated = self.events.modify(event_id, lambda event: add_exclusion(event, day))
        logger.info(f"Excluded {parse_calendar_date(day)} from event {event_id}")
        return updated

    def edit_occurrence(
        self, event_id: str, day: Union[str, date], changes: EventChanges
    ) -> tuple[CalendarEvent, CalendarEvent]:
        """Replace one occurrence with a standalone event.

        Args:
            event_id: ID of the recurring event.
            day: Date of the occurrence.
            changes: Fields to change on the standalone event.

        Returns:
            Tuple of (updated base event, new standalone event).

        Raises:
            EventNotFoundError: If the event does not exist.
            NotRecurringError: If the event is not recurring.
            OccurrenceNotFoundError: If ``day`` is not an occurrence.
            CategoryNotFoundError: If the changes reference an unknown category.
        """
        if "category_id" in changes.model_fields_set and changes.category_id is not None:
            self.categories.get(changes.category_id)
        if "participant_ids" in changes.model_fields_set and changes.participant_ids is not None:
            changes = changes.model_copy(
                update={"participant_ids": self._known_participants(changes.participant_ids)}
            )

        created: list[CalendarEvent] = []

        def split(event: CalendarEvent) -> CalendarEvent:
            self._require_occurrence(event, day)
            updated, override = edit_occurrence(event, day, changes)
            created.append(override)
            return updated

        updated = self.events.modify(event_id, split)
        self.events.save(created[0])
        return updated, created[0]

    def delete_occurrence(self, event_id: str, day: Union[str, date]) -> CalendarEvent:
        """Remove one occurrence from a series by excluding its date.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotRecurringError: If the event is not recurring.
            OccurrenceNotFoundError: If ``day`` is not an occurrence.
        """

        def exclude(event: CalendarEvent) -> CalendarEvent:
            self._require_occurrence(event, day)
            return add_exclusion(event, day)

        updated = self.events.modify(event_id, exclude)
        logger.info(f"Deleted occurrence {parse_calendar_date(day)} of event {event_id}")
        return updated

    def _require_occurrence(self, event: CalendarEvent, day: Union[str, date]) -> None:
        if not event.is_recurring or event.recurrence is None:
            raise NotRecurringError(event.id)
        key = parse_calendar_date(day)
        occurrences = list(expand(event, key, key, self.max_iterations))
        if not occurrences:
            raise OccurrenceNotFoundError(event.id, key)

    # ===== Events =====

    def create_event(self, fields: dict[str, Any]) -> CalendarEvent:
        """Create an event.

        Args:
            fields: Event fields; ``recurrence`` may be a raw rule mapping.

        Returns:
            The stored event.

        Raises:
            InvalidRuleError: If the recurrence rule is invalid.
            CategoryNotFoundError: If ``category_id`` is unknown.
            ValueError: If any other field is invalid.
        """
        data = self._prepare_event_fields(dict(fields))
        event = CalendarEvent.model_validate(data)
        self.events.save(event)
        logger.info(
            f"Created {'recurring ' if event.is_recurring else ''}event {event.id} ({event.title})"
        )
        return event

    def get_event(self, event_id: str) -> CalendarEvent:
        return self.events.get(event_id)

    def list_events(
        self,
        start_date: Optional[WindowBound] = None,
        end_date: Optional[WindowBound] = None,
        category_ids: Optional[list[str]] = None,
        include_recurring: bool = True,
        expand_recurring: bool = False,
    ) -> list[EventOrInstance]:
        """List events, optionally restricted to a window and categories.

        The window only applies when both bounds are given. Events are
        matched on the calendar date of their start. With ``expand_recurring``
        and a window, each recurring event is replaced by its instances in
        the window.

        Args:
            start_date: Inclusive window start.
            end_date: Inclusive window end.
            category_ids: Only events in these categories.
            include_recurring: Whether to include recurring events at all.
            expand_recurring: Whether to expand recurring events into instances.

        Returns:
            Events (and instances) ordered by start.

        Raises:
            InvalidWindowError: If the window is invalid.
        """
        window = None
        if start_date is not None and end_date is not None:
            window = (
                to_window_date(start_date, "start_date"),
                to_window_date(end_date, "end_date"),
            )
            if window[1] < window[0]:
                raise InvalidWindowError(
                    f"Window end {window[1].isoformat()} is before window start "
                    f"{window[0].isoformat()}"
                )

        results: list[EventOrInstance] = []
        for event in self.events.all():
            if category_ids and event.category_id not in category_ids:
                continue
            if event.is_recurring:
                if not include_recurring:
                    continue
                if window is not None and expand_recurring:
                    results.extend(self.expand_recurring_event(event.id, *window))
                    continue
            if window is not None and not window[0] <= event.start_date.date() <= window[1]:
                continue
            results.append(event)

        results.sort(key=_sort_key)
        return results

    def update_event(self, event_id: str, fields: dict[str, Any]) -> CalendarEvent:
        """Apply a partial update to an event.

        Setting ``recurrence`` to a rule makes the event recurring; setting
        it to None makes it a single event. Exclusions are kept either way,
        so overrides split off the series never reappear as occurrences.
        They can only be added, through ``add_exclusion_date``,
        ``edit_occurrence`` or ``delete_occurrence``.

        Raises:
            EventNotFoundError: If the event does not exist.
            InvalidRuleError: If the new recurrence rule is invalid.
            CategoryNotFoundError: If ``category_id`` is unknown.
            ValueError: If ``excluded_dates`` is given or the result is invalid.
        """
        if "excluded_dates" in fields:
            raise ValueError(
                "excluded_dates cannot be replaced; exclude dates one at a time instead"
            )
        changes = self._prepare_event_fields(dict(fields))
        if "recurrence" in changes and changes["recurrence"] is None:
            changes["is_recurring"] = False

        def apply(event: CalendarEvent) -> CalendarEvent:
            data = event.model_dump()
            data.update(changes)
            data["updated_at"] = _now()
            return CalendarEvent.model_validate(data)

        updated = self.events.modify(event_id, apply)
        logger.info(f"Updated event {event_id}: {sorted(changes)}")
        return updated

    def delete_event(self, event_id: str) -> CalendarEvent:
        """Delete an event together with the standalone overrides split off it.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        deleted = self.events.delete(event_id)
        overrides = [e.id for e in self.events.all() if e.parent_event_id == event_id]
        for override_id in overrides:
            self.events.delete(override_id)
        logger.info(f"Deleted event {event_id} and {len(overrides)} override(s)")
        return deleted

    def search_events(self, query: str) -> list[CalendarEvent]:
        """Case-insensitive substring search on title and description.

        Raises:
            ValueError: If the query is blank.
        """
        needle = query.strip().lower()
        if not needle:
            raise ValueError("Search query must not be empty")
        return [
            event
            for event in self.events.all()
            if needle in event.title.lower()
            or (event.description and needle in event.description.lower())
        ]

    def events_by_category(self, category_id: str) -> list[CalendarEvent]:
        return [e for e in self.events.all() if e.category_id == category_id]

    def _prepare_event_fields(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("recurrence") is not None:
            data["recurrence"] = build_rule(data["recurrence"])
            data["is_recurring"] = True
        if data.get("category_id") is not None:
            self.categories.get(data["category_id"])
        if data.get("participant_ids") is not None:
            data["participant_ids"] = self._known_participants(data["participant_ids"])
        return data

    def _known_participants(self, participant_ids: list[str]) -> list[str]:
        known = [pid for pid in participant_ids if pid in self.participants]
        dropped = set(participant_ids) - set(known)
        if dropped:
            logger.debug(f"Ignoring unknown participant IDs: {sorted(dropped)}")
        return known

    # ===== Categories =====

    def create_category(self, fields: dict[str, Any]) -> Category:
        category = Category.model_validate(fields)
        self.categories.save(category)
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    def get_category(self, category_id: str) -> Category:
        return self.categories.get(category_id)

    def list_categories(self) -> list[Category]:
        return sorted(self.categories.all(), key=lambda c: c.name)

    def visible_categories(self) -> list[Category]:
        return [c for c in self.list_categories() if c.is_visible]

    def update_category(self, category_id: str, fields: dict[str, Any]) -> Category:
        """Apply a partial update to a category.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            ValueError: If the result is invalid.
        """

        def apply(category: Category) -> Category:
            return Category.model_validate({**category.model_dump(), **fields})

        return self.categories.modify(category_id, apply)

    def set_category_visibility(self, category_id: str, is_visible: bool) -> Category:
        return self.categories.modify(
            category_id, lambda c: c.model_copy(update={"is_visible": is_visible})
        )

    def toggle_category_visibility(self, category_id: str) -> Category:
        return self.categories.modify(
            category_id, lambda c: c.model_copy(update={"is_visible": not c.is_visible})
        )

    def delete_category(self, category_id: str) -> Category:
        """Delete a category; its events are kept and become uncategorized.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        deleted = self.categories.delete(category_id)
        for event in self.events_by_category(category_id):
            self.events.modify(
                event.id, lambda e: e.model_copy(update={"category_id": None})
            )
        logger.info(f"Deleted category {category_id}")
        return deleted

    def create_default_categories(self) -> list[Category]:
        """Create the default categories whose names are not taken yet.

        Returns:
            The categories created by this call.
        """
        existing = {c.name.lower() for c in self.categories.all()}
        created = [
            self.create_category(fields)
            for fields in DEFAULT_CATEGORIES
            if fields["name"].lower() not in existing
        ]
        return created

    # ===== Participants =====

    def create_participant(self, fields: dict[str, Any]) -> Participant:
        """Create a participant.

        Raises:
            DuplicateRecordError: If the email is already in use.
            ValueError: If a field is invalid.
        """
        participant = Participant.model_validate(fields)
        self.participants.insert(participant, check=_ensure_email_free)
        logger.info(f"Created participant {participant.id} ({participant.email})")
        return participant

    def get_participant(self, participant_id: str) -> Participant:
        return self.participants.get(participant_id)

    def list_participants(self) -> list[Participant]:
        return sorted(self.participants.all(), key=lambda p: p.name)

    def update_participant(self, participant_id: str, fields: dict[str, Any]) -> Participant:
        """Apply a partial update to a participant.

        Raises:
            ParticipantNotFoundError: If the participant does not exist.
            DuplicateRecordError: If the new email is already in use.
            ValueError: If the result is invalid.
        """

        def apply(participant: Participant) -> Participant:
            return Participant.model_validate({**participant.model_dump(), **fields})

        return self.participants.modify(participant_id, apply, check=_ensure_email_free)

    def update_participant_status(
        self, participant_id: str, status: ParticipantStatus
    ) -> Participant:
        return self.update_participant(participant_id, {"status": status})

    def delete_participant(self, participant_id: str) -> Participant:
        """Delete a participant and remove them from every event.

        Raises:
            ParticipantNotFoundError: If the participant does not exist.
        """
        deleted = self.participants.delete(participant_id)
        for event in self.events.all():
            if participant_id in event.participant_ids:
                self.events.modify(
                    event.id,
                    lambda e: e.model_copy(
                        update={
                            "participant_ids": [
                                p for p in e.participant_ids if p != participant_id
                            ]
                        }
                    ),
                )
        logger.info(f"Deleted participant {participant_id}")
        return deleted

    def search_participants(self, query: str) -> list[Participant]:
        needle = query.strip().lower()
        return [
            p
            for p in self.list_participants()
            if needle in p.name.lower() or needle in p.email
        ]

    def participants_by_department(self, department: str) -> list[Participant]:
        return [p for p in self.list_participants() if p.department == department]

    def departments(self) -> list[str]:
        """Return the distinct departments in alphabetical order."""
        return sorted({p.department for p in self.participants.all() if p.department})

    # ===== Lifecycle =====

    def clear(self) -> None:
        """Remove every stored record."""
        self.events.clear()
        self.categories.clear()
        self.participants.clear()
        logger.info("Cleared all calendar data")
