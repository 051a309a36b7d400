"""Calendar entity models.

Contains the stored records (events, categories, participants) and the
OccurrenceInstance produced for each occurrence of a recurring event.
Instances are never stored; they are rebuilt on every query.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from models.recurrence import RecurrenceRule


HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"

NotificationType = Literal["popup", "email", "push"]
ParticipantStatus = Literal["accepted", "declined", "pending", "maybe"]


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_calendar_date(value: str | date) -> str:
    """Normalize a calendar date to its YYYY-MM-DD string.

    Args:
        value: A date, a datetime, or an ISO date/timestamp string.

    Returns:
        The YYYY-MM-DD form of the calendar date.

    Raises:
        ValueError: If the value is not a recognizable date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        if len(text) > 10:
            return datetime.fromisoformat(text).date().isoformat()
        return date.fromisoformat(text).isoformat()
    except ValueError:
        raise ValueError(f"Invalid calendar date: {value!r} (expected YYYY-MM-DD)")


class EventNotification(BaseModel):
    """Notification setting attached to an event.

    Args:
        id: Unique identifier (auto-generated).
        type: Delivery channel.
        timing: Minutes before the event start.
        message: Text to show.
        is_enabled: Whether the notification is active.
    """

    id: str = Field(default_factory=new_id, description="Unique identifier")
    type: NotificationType = Field(default="popup", description="Delivery channel")
    timing: int = Field(ge=0, description="Minutes before the event")
    message: str = Field(description="Notification text")
    is_enabled: bool = Field(default=True, description="Whether active")


class Category(BaseModel):
    """Event category used to group and color events.

    Args:
        id: Unique identifier (auto-generated).
        name: Display name.
        color: Hex color code.
        icon: Emoji or short icon identifier.
        is_visible: Whether events in this category are shown.
        description: Optional description.
    """

    id: str = Field(default_factory=new_id, description="Unique identifier")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    color: str = Field(pattern=HEX_COLOR_PATTERN, description="Hex color code")
    icon: str = Field(default="", max_length=10, description="Emoji or icon id")
    is_visible: bool = Field(default=True, description="Whether visible")
    description: Optional[str] = Field(default=None, description="Description")


class Participant(BaseModel):
    """Person who can be invited to events.

    Args:
        id: Unique identifier (auto-generated).
        name: Full name.
        email: Email address (stored lower-case).
        avatar: Profile picture URL.
        role: Job role.
        department: Department name.
        status: Invitation status.
    """

    id: str = Field(default_factory=new_id, description="Unique identifier")
    name: str = Field(min_length=1, max_length=255, description="Full name")
    email: str = Field(max_length=255, description="Email address")
    avatar: Optional[str] = Field(default=None, description="Profile picture URL")
    role: Optional[str] = Field(default=None, max_length=100, description="Role")
    department: Optional[str] = Field(
        default=None, max_length=100, description="Department"
    )
    status: ParticipantStatus = Field(default="pending", description="Status")

    @field_validator("email")
    @classmethod
    def validate_email(cls, email: str) -> str:
        """Validate email format.

        Args:
            email: Email address to validate.

        Returns:
            The lower-cased email address.

        Raises:
            ValueError: If email format is invalid.
        """
        if "@" not in email or "." not in email.split("@")[1]:
            raise ValueError(f"Invalid email format: {email}")
        return email.lower()


class CalendarEvent(BaseModel):
    """A stored calendar event; the base event of a series when recurring.

    Args:
        id: Unique identifier (auto-generated).
        title: Event title.
        description: Event description.
        start_date: Start datetime.
        end_date: End datetime; defines the duration of each occurrence.
        all_day: All-day event flag.
        color: Background color (hex).
        text_color: Text color (hex).
        location: Event location.
        category_id: Category this event belongs to.
        participant_ids: IDs of invited participants.
        notifications: Notification settings.
        is_recurring: Whether the event repeats. Defaults to whether a
            recurrence rule was given.
        recurrence: Recurrence rule, present iff is_recurring.
        excluded_dates: Occurrence dates (YYYY-MM-DD) suppressed from the series.
        parent_event_id: For standalone overrides, the series they came from.
        created_at: When the event was created.
        updated_at: When the event was last modified.
    """

    id: str = Field(default_factory=new_id, description="Unique identifier")
    title: str = Field(min_length=1, max_length=255, description="Event title")
    description: Optional[str] = Field(default=None, description="Description")
    start_date: datetime = Field(description="Start datetime")
    end_date: Optional[datetime] = Field(default=None, description="End datetime")
    all_day: bool = Field(default=False, description="All-day event flag")
    color: str = Field(
        default="#4285f4", pattern=HEX_COLOR_PATTERN, description="Event color"
    )
    text_color: str = Field(
        default="#ffffff", pattern=HEX_COLOR_PATTERN, description="Text color"
    )
    location: Optional[str] = Field(default=None, description="Event location")
    category_id: Optional[str] = Field(default=None, description="Category ID")
    participant_ids: list[str] = Field(
        default_factory=list, description="Participant IDs"
    )
    notifications: list[EventNotification] = Field(
        default_factory=list, description="Notification settings"
    )
    is_recurring: bool = Field(default=False, description="Recurring flag")
    recurrence: Optional[RecurrenceRule] = Field(
        default=None, description="Recurrence rule"
    )
    excluded_dates: list[str] = Field(
        default_factory=list, description="Excluded dates (YYYY-MM-DD)"
    )
    parent_event_id: Optional[str] = Field(
        default=None, description="Series this override belongs to"
    )
    created_at: datetime = Field(default_factory=_utcnow, description="Created at")
    updated_at: datetime = Field(default_factory=_utcnow, description="Updated at")

    @model_validator(mode="before")
    @classmethod
    def default_recurring_flag(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("is_recurring") is None:
            data = {**data, "is_recurring": data.get("recurrence") is not None}
        return data

    @field_validator("excluded_dates")
    @classmethod
    def normalize_excluded_dates(cls, dates: list[str]) -> list[str]:
        """Validate excluded dates and drop duplicates, keeping first-seen order."""
        seen: list[str] = []
        for value in dates:
            day = parse_calendar_date(value)
            if day not in seen:
                seen.append(day)
        return seen

    @model_validator(mode="after")
    def validate_consistency(self) -> "CalendarEvent":
        """Check time range and recurrence flag consistency.

        Raises:
            ValueError: If end precedes start, naive and aware datetimes are
                mixed, or is_recurring disagrees with the recurrence rule.
        """
        if self.end_date is not None:
            if (self.start_date.tzinfo is None) != (self.end_date.tzinfo is None):
                raise ValueError("start_date and end_date must both be naive or both be aware")
            if self.end_date < self.start_date:
                raise ValueError("end_date must not be before start_date")
        if self.is_recurring and self.recurrence is None:
            raise ValueError("recurring events require a recurrence rule")
        if not self.is_recurring and self.recurrence is not None:
            raise ValueError("recurrence rule given for a non-recurring event")
        return self

    @property
    def duration(self) -> timedelta:
        """Length of the event; zero when it has no end."""
        if self.end_date is None:
            return timedelta(0)
        return self.end_date - self.start_date

    def is_override(self) -> bool:
        """Check if this is a standalone override of one occurrence of a series."""
        return self.parent_event_id is not None


class OccurrenceInstance(BaseModel):
    """One materialized occurrence of a recurring event.

    A by-value copy of the base event's display fields, pinned to a single
    occurrence. Its id is derived from the base id and the occurrence date,
    so recomputing the same occurrence always yields the same id.
    """

    id: str
    parent_event_id: str
    title: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    all_day: bool = False
    color: str
    text_color: str
    location: Optional[str] = None
    category_id: Optional[str] = None
    participant_ids: list[str] = Field(default_factory=list)
    notifications: list[EventNotification] = Field(default_factory=list)
    is_recurring: Literal[False] = False
    recurrence: None = None

    @property
    def occurrence_date(self) -> str:
        return self.start_date.date().isoformat()


class EventChanges(BaseModel):
    """Partial set of display fields used to edit an event or one occurrence.

    Only fields that were explicitly set are applied (see ``model_fields_set``).
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    all_day: Optional[bool] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    text_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    location: Optional[str] = None
    category_id: Optional[str] = None
    participant_ids: Optional[list[str]] = None
    notifications: Optional[list[EventNotification]] = None

    def applied(self) -> dict[str, Any]:
        """Return only the explicitly set fields, ready for model_copy/validation."""
        return {name: getattr(self, name) for name in self.model_fields_set}
