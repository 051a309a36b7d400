"""Helper functions for API integration tests.

This module provides convenience functions for building valid request bodies
and creating records through the HTTP API, so tests only spell out the fields
they care about.
"""

from typing import Any

from fastapi.testclient import TestClient


def event_request(**overrides: Any) -> dict[str, Any]:
    """Create a request body for POST /events.

    Args:
        **overrides: Fields to add or replace.

    Returns:
        A one-hour "Team Meeting" on 2024-01-01 09:00 with the overrides applied.
    """
    body: dict[str, Any] = {
        "title": "Team Meeting",
        "start_date": "2024-01-01T09:00:00",
        "end_date": "2024-01-01T10:00:00",
    }
    body.update(overrides)
    return body


def create_event_via_api(client: TestClient, **overrides: Any) -> dict[str, Any]:
    """POST /events and return the created event's JSON.

    Example:
        series = create_event_via_api(client, recurrence={"frequency": "daily"})
    """
    response = client.post("/events", json=event_request(**overrides))
    assert response.status_code == 201, response.json()
    return response.json()


def create_category_via_api(
    client: TestClient, name: str = "Work", color: str = "#5cffe4", **overrides: Any
) -> dict[str, Any]:
    response = client.post("/categories", json={"name": name, "color": color, **overrides})
    assert response.status_code == 201, response.json()
    return response.json()


def create_participant_via_api(
    client: TestClient,
    name: str = "Alice Johnson",
    email: str = "alice@example.com",
    **overrides: Any,
) -> dict[str, Any]:
    response = client.post(
        "/participants", json={"name": name, "email": email, **overrides}
    )
    assert response.status_code == 201, response.json()
    return response.json()
