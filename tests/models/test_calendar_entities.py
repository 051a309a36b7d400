"""Unit tests for calendar entity models."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from models.entities import (
    CalendarEvent,
    Category,
    EventChanges,
    Participant,
    parse_calendar_date,
)
from models.recurrence import DailyRule


class TestParseCalendarDate:
    def test_forms(self):
        assert parse_calendar_date("2024-01-05") == "2024-01-05"
        assert parse_calendar_date("2024-01-05T10:00:00") == "2024-01-05"
        assert parse_calendar_date(date(2024, 1, 5)) == "2024-01-05"
        assert parse_calendar_date(datetime(2024, 1, 5, 23, 59)) == "2024-01-05"

    @pytest.mark.parametrize("value", ["", "05/01/2024", "2024-02-30"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_calendar_date(value)


class TestCalendarEvent:
    """Test CalendarEvent validation."""

    def test_defaults(self):
        event = CalendarEvent(title="Lunch", start_date=datetime(2024, 1, 1, 12, 0))

        assert event.id
        assert event.color == "#4285f4"
        assert event.text_color == "#ffffff"
        assert event.is_recurring is False
        assert event.duration == timedelta(0)
        assert event.is_override() is False

    def test_recurring_flag_follows_rule(self):
        event = CalendarEvent(
            title="Standup",
            start_date=datetime(2024, 1, 1, 9, 0),
            recurrence={"frequency": "daily"},
        )

        assert event.is_recurring is True
        assert isinstance(event.recurrence, DailyRule)

    def test_recurring_without_rule_rejected(self):
        with pytest.raises(ValidationError):
            CalendarEvent(
                title="Standup", start_date=datetime(2024, 1, 1), is_recurring=True
            )

    def test_rule_without_flag_rejected(self):
        with pytest.raises(ValidationError):
            CalendarEvent(
                title="Standup",
                start_date=datetime(2024, 1, 1),
                is_recurring=False,
                recurrence={"frequency": "daily"},
            )

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            CalendarEvent(
                title="Backwards",
                start_date=datetime(2024, 1, 1, 10, 0),
                end_date=datetime(2024, 1, 1, 9, 0),
            )

    def test_mixed_naive_and_aware_rejected(self):
        with pytest.raises(ValidationError):
            CalendarEvent(
                title="Mixed",
                start_date=datetime(2024, 1, 1, 9, 0),
                end_date=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
            )

    def test_excluded_dates_normalized(self):
        event = CalendarEvent(
            title="Standup",
            start_date=datetime(2024, 1, 1, 9, 0),
            recurrence={"frequency": "daily"},
            excluded_dates=["2024-01-03T00:00:00", "2024-01-03", "2024-01-02"],
        )

        assert event.excluded_dates == ["2024-01-03", "2024-01-02"]

    def test_invalid_color_rejected(self):
        with pytest.raises(ValidationError):
            CalendarEvent(title="Lunch", start_date=datetime(2024, 1, 1), color="blue")


class TestCategoryAndParticipant:
    def test_category_requires_hex_color(self):
        assert Category(name="Work", color="#5CFFE4").color == "#5CFFE4"
        with pytest.raises(ValidationError):
            Category(name="Work", color="#5cf")

    def test_participant_email(self):
        assert Participant(name="Ann", email="ANN@Example.COM").email == "ann@example.com"
        with pytest.raises(ValidationError):
            Participant(name="Ann", email="ann-at-example")

    def test_participant_status_values(self):
        with pytest.raises(ValidationError):
            Participant(name="Ann", email="ann@example.com", status="busy")


class TestEventChanges:
    def test_applied_only_includes_set_fields(self):
        changes = EventChanges(title="New", location=None)

        assert changes.applied() == {"title": "New", "location": None}

    def test_empty(self):
        assert EventChanges().applied() == {}
