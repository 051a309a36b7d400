"""Unit tests for CalendarService."""

import threading
from datetime import datetime

import pytest

from models.entities import CalendarEvent, EventChanges, OccurrenceInstance
from models.errors import (
    CategoryNotFoundError,
    DuplicateRecordError,
    EventNotFoundError,
    InvalidRuleError,
    InvalidWindowError,
    NotRecurringError,
    OccurrenceNotFoundError,
    ParticipantNotFoundError,
)
from models.service import DEFAULT_CATEGORIES, CalendarService


@pytest.fixture
def service():
    return CalendarService(max_iterations=5000)


def make_daily(service: CalendarService, **fields) -> CalendarEvent:
    data = {
        "title": "Standup",
        "start_date": datetime(2024, 1, 1, 9, 0),
        "end_date": datetime(2024, 1, 1, 9, 15),
        "recurrence": {"frequency": "daily"},
    }
    data.update(fields)
    return service.create_event(data)


class TestEventCrud:
    """Test event create/read/update/delete."""

    def test_create_recurring_from_raw_rule(self, service):
        event = make_daily(service)

        assert event.is_recurring is True
        assert event.recurrence.frequency == "daily"
        assert service.get_event(event.id) == event

    def test_create_single_event(self, service):
        event = service.create_event(
            {"title": "Lunch", "start_date": datetime(2024, 1, 2, 12, 0)}
        )

        assert event.is_recurring is False
        assert event.recurrence is None

    def test_create_with_invalid_rule(self, service):
        with pytest.raises(InvalidRuleError):
            make_daily(service, recurrence={"frequency": "daily", "interval": 0})

        assert len(service.events) == 0

    def test_create_with_unknown_category(self, service):
        with pytest.raises(CategoryNotFoundError):
            make_daily(service, category_id="nope")

    def test_unknown_participants_dropped(self, service):
        participant = service.create_participant({"name": "Ann", "email": "ann@example.com"})

        event = make_daily(service, participant_ids=[participant.id, "ghost"])

        assert event.participant_ids == [participant.id]

    def test_get_missing(self, service):
        with pytest.raises(EventNotFoundError):
            service.get_event("missing")

    def test_update_fields(self, service):
        event = make_daily(service)

        updated = service.update_event(event.id, {"title": "Daily sync"})

        assert updated.title == "Daily sync"
        assert updated.updated_at >= event.updated_at
        assert updated.recurrence == event.recurrence

    def test_update_clears_recurrence(self, service):
        """Verify removing the rule turns the event into a single event."""
        event = make_daily(service, excluded_dates=["2024-01-02"])

        updated = service.update_event(event.id, {"recurrence": None})

        assert updated.is_recurring is False
        assert updated.excluded_dates == ["2024-01-02"]

    def test_update_rejects_excluded_dates(self, service):
        event = make_daily(service)
        service.add_exclusion_date(event.id, "2024-01-03")

        with pytest.raises(ValueError):
            service.update_event(event.id, {"excluded_dates": []})

        assert service.get_event(event.id).excluded_dates == ["2024-01-03"]
        dates = [
            i.occurrence_date
            for i in service.expand_recurring_event(event.id, "2024-01-01", "2024-01-05")
        ]
        assert dates == ["2024-01-01", "2024-01-02", "2024-01-04", "2024-01-05"]

    def test_edited_occurrence_stays_excluded_across_rule_changes(self, service):
        """Verify an override never sits next to a regenerated occurrence."""
        event = make_daily(service)
        _, override = service.edit_occurrence(
            event.id, "2024-01-03", EventChanges(title="Moved")
        )

        service.update_event(event.id, {"recurrence": None})
        service.update_event(event.id, {"recurrence": {"frequency": "daily"}})

        listing = service.list_events("2024-01-01", "2024-01-05", expand_recurring=True)
        on_third = [
            item for item in listing if item.start_date.date().isoformat() == "2024-01-03"
        ]
        assert [item.id for item in on_third] == [override.id]

    def test_update_sets_recurrence(self, service):
        event = service.create_event(
            {"title": "Review", "start_date": datetime(2024, 1, 2, 12, 0)}
        )

        updated = service.update_event(
            event.id, {"recurrence": {"frequency": "weekly", "days_of_week": [2]}}
        )

        assert updated.is_recurring is True
        assert updated.recurrence.days_of_week == [2]

    def test_delete_removes_overrides(self, service):
        event = make_daily(service)
        _, override = service.edit_occurrence(event.id, "2024-01-03", EventChanges(title="x"))

        service.delete_event(event.id)

        assert len(service.events) == 0
        with pytest.raises(EventNotFoundError):
            service.get_event(override.id)

    def test_search(self, service):
        make_daily(service, title="Standup", description="Team sync")
        service.create_event({"title": "Dentist", "start_date": datetime(2024, 1, 5, 8, 0)})

        assert [e.title for e in service.search_events("SYNC")] == ["Standup"]
        with pytest.raises(ValueError):
            service.search_events("   ")


class TestListEvents:
    """Test event listing with windows and expansion."""

    def test_list_sorted_by_start(self, service):
        service.create_event({"title": "B", "start_date": datetime(2024, 1, 5, 8, 0)})
        service.create_event({"title": "A", "start_date": datetime(2024, 1, 2, 8, 0)})

        assert [e.title for e in service.list_events()] == ["A", "B"]

    def test_window_filters_single_events(self, service):
        service.create_event({"title": "In", "start_date": datetime(2024, 1, 5, 8, 0)})
        service.create_event({"title": "Out", "start_date": datetime(2024, 2, 5, 8, 0)})

        events = service.list_events("2024-01-01", "2024-01-31", include_recurring=False)

        assert [e.title for e in events] == ["In"]

    def test_expand_recurring(self, service):
        """Verify recurring events are replaced by their instances in the window."""
        event = make_daily(service)
        service.create_event({"title": "Lunch", "start_date": datetime(2024, 1, 2, 12, 0)})

        results = service.list_events("2024-01-01", "2024-01-03", expand_recurring=True)

        assert [type(r) for r in results] == [
            OccurrenceInstance,
            OccurrenceInstance,
            CalendarEvent,
            OccurrenceInstance,
        ]
        assert results[0].id == f"{event.id}-2024-01-01"

    def test_category_filter(self, service):
        work = service.create_category({"name": "Work", "color": "#5cffe4"})
        make_daily(service, category_id=work.id)
        make_daily(service, title="Other")

        events = service.list_events(category_ids=[work.id])

        assert len(events) == 1
        assert events[0].category_id == work.id

    def test_invalid_window(self, service):
        with pytest.raises(InvalidWindowError):
            service.list_events("2024-01-01", "garbage")


class TestRecurrenceOperations:
    """Test expansion, exclusion and occurrence edits through the service."""

    def test_expand(self, service):
        event = make_daily(service, excluded_dates=["2024-01-03"])

        instances = service.expand_recurring_event(event.id, "2024-01-01", "2024-01-05")

        assert [i.occurrence_date for i in instances] == [
            "2024-01-01",
            "2024-01-02",
            "2024-01-04",
            "2024-01-05",
        ]

    def test_expand_non_recurring(self, service):
        event = service.create_event({"title": "Once", "start_date": datetime(2024, 1, 2)})

        with pytest.raises(NotRecurringError):
            service.expand_recurring_event(event.id, "2024-01-01", "2024-01-31")

    def test_add_exclusion_persists(self, service):
        event = make_daily(service)

        service.add_exclusion_date(event.id, "2024-01-02")
        service.add_exclusion_date(event.id, "2024-01-02")

        assert service.get_event(event.id).excluded_dates == ["2024-01-02"]

    def test_edit_occurrence(self, service):
        event = make_daily(service)

        updated, override = service.edit_occurrence(
            event.id, "2024-01-04", EventChanges(title="Moved")
        )

        assert "2024-01-04" in service.get_event(event.id).excluded_dates
        stored = service.get_event(override.id)
        assert stored.title == "Moved"
        assert stored.parent_event_id == event.id
        assert updated.excluded_dates == ["2024-01-04"]

    def test_edit_excluded_occurrence(self, service):
        """Verify an already excluded date is no longer an editable occurrence."""
        event = make_daily(service, excluded_dates=["2024-01-04"])

        with pytest.raises(OccurrenceNotFoundError):
            service.edit_occurrence(event.id, "2024-01-04", EventChanges(title="x"))

    def test_edit_date_outside_series(self, service):
        event = make_daily(service, recurrence={"frequency": "weekly"})

        with pytest.raises(OccurrenceNotFoundError):
            service.edit_occurrence(event.id, "2024-01-02", EventChanges(title="x"))
        assert len(service.events) == 1

    def test_edit_with_unknown_category(self, service):
        event = make_daily(service)

        with pytest.raises(CategoryNotFoundError):
            service.edit_occurrence(
                event.id, "2024-01-02", EventChanges(category_id="nope")
            )

    def test_delete_occurrence(self, service):
        event = make_daily(service)

        updated = service.delete_occurrence(event.id, "2024-01-02")

        assert updated.excluded_dates == ["2024-01-02"]
        with pytest.raises(OccurrenceNotFoundError):
            service.delete_occurrence(event.id, "2024-01-02")


class TestCategories:
    """Test category management."""

    def test_create_defaults(self, service):
        created = service.create_default_categories()

        assert len(created) == len(DEFAULT_CATEGORIES)
        assert service.create_default_categories() == []

    def test_defaults_skip_existing_names(self, service):
        service.create_category({"name": "work", "color": "#000000"})

        created = service.create_default_categories()

        assert "Work" not in [c.name for c in created]
        assert len(service.list_categories()) == len(DEFAULT_CATEGORIES)

    def test_list_sorted_and_visibility(self, service):
        b = service.create_category({"name": "B", "color": "#000000"})
        service.create_category({"name": "A", "color": "#000000"})

        service.toggle_category_visibility(b.id)

        assert [c.name for c in service.list_categories()] == ["A", "B"]
        assert [c.name for c in service.visible_categories()] == ["A"]
        assert service.set_category_visibility(b.id, True).is_visible is True

    def test_update_validates(self, service):
        category = service.create_category({"name": "A", "color": "#000000"})

        with pytest.raises(ValueError):
            service.update_category(category.id, {"color": "red"})

    def test_delete_uncategorizes_events(self, service):
        category = service.create_category({"name": "A", "color": "#000000"})
        event = make_daily(service, category_id=category.id)

        service.delete_category(category.id)

        assert service.get_event(event.id).category_id is None
        with pytest.raises(CategoryNotFoundError):
            service.get_category(category.id)


class TestParticipants:
    """Test participant management."""

    def test_email_lowercased_and_unique(self, service):
        participant = service.create_participant({"name": "Ann", "email": "Ann@Example.com"})

        assert participant.email == "ann@example.com"
        with pytest.raises(DuplicateRecordError):
            service.create_participant({"name": "Other", "email": "ann@example.com"})

    def test_concurrent_creates_with_same_email(self, service):
        """Verify racing creates of one email leave a single participant."""
        barrier = threading.Barrier(12)
        errors = []

        def create(index):
            barrier.wait()
            try:
                service.create_participant({"name": f"Ann {index}", "email": "ann@example.com"})
            except DuplicateRecordError as e:
                errors.append(e)

        threads = [threading.Thread(target=create, args=(i,)) for i in range(12)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(errors) == 11
        assert len(service.participants) == 1

    def test_update_to_taken_email(self, service):
        service.create_participant({"name": "Ann", "email": "ann@example.com"})
        bob = service.create_participant({"name": "Bob", "email": "bob@example.com"})

        with pytest.raises(DuplicateRecordError):
            service.update_participant(bob.id, {"email": "ann@example.com"})

        assert service.update_participant(bob.id, {"email": "bob@example.com"}).name == "Bob"

    def test_status(self, service):
        ann = service.create_participant({"name": "Ann", "email": "ann@example.com"})

        assert ann.status == "pending"
        assert service.update_participant_status(ann.id, "accepted").status == "accepted"

    def test_search_and_departments(self, service):
        service.create_participant(
            {"name": "Ann Lee", "email": "ann@example.com", "department": "Design"}
        )
        service.create_participant(
            {"name": "Bob Stone", "email": "bob@corp.io", "department": "Engineering"}
        )

        assert [p.name for p in service.search_participants("corp")] == ["Bob Stone"]
        assert [p.name for p in service.participants_by_department("Design")] == ["Ann Lee"]
        assert service.departments() == ["Design", "Engineering"]

    def test_delete_removes_from_events(self, service):
        ann = service.create_participant({"name": "Ann", "email": "ann@example.com"})
        event = make_daily(service, participant_ids=[ann.id])

        service.delete_participant(ann.id)

        assert service.get_event(event.id).participant_ids == []
        with pytest.raises(ParticipantNotFoundError):
            service.get_participant(ann.id)


class TestClear:
    def test_clear(self, service):
        make_daily(service)
        service.create_default_categories()

        service.clear()

        assert len(service.events) == 0
        assert len(service.categories) == 0
