"""Participants sub-client for the Calendar Events API (/participants/*)."""

from typing import Any

from client._base import BaseClient
from client.models import DeleteResponse, Participant


class ParticipantsClient(BaseClient):
    """Synchronous client for participant endpoints (/participants/*)."""

    _BASE_PATH = "/participants"

    def create(self, name: str, email: str, **fields: Any) -> Participant:
        """Create a participant.

        Args:
            name: Full name.
            email: Email address.
            **fields: ``avatar``, ``role``, ``department`` and ``status``.

        Raises:
            ConflictError: If the email is already in use.
            ValidationError: If a field is invalid.
        """
        body = {"name": name, "email": email, **fields}
        return Participant(**self._post(self._BASE_PATH, json=body))

    def all(self, q: str | None = None, department: str | None = None) -> list[Participant]:
        """List participants, optionally filtered by text and department."""
        data = self._get(self._BASE_PATH, params={"q": q, "department": department})
        return [Participant(**item) for item in data["items"]]

    def departments(self) -> list[str]:
        return self._get(self._path("departments"))

    def get(self, participant_id: str) -> Participant:
        return Participant(**self._get(self._path(participant_id)))

    def update(self, participant_id: str, **fields: Any) -> Participant:
        return Participant(**self._patch(self._path(participant_id), json=fields))

    def set_status(self, participant_id: str, status: str) -> Participant:
        """Set the invitation status (accepted, declined, pending, maybe)."""
        data = self._put(self._path(participant_id, "status"), json={"status": status})
        return Participant(**data)

    def delete(self, participant_id: str) -> DeleteResponse:
        """Delete a participant and remove them from all events."""
        return DeleteResponse(**self._delete(self._path(participant_id)))
