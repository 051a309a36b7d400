"""Shared fixtures for API integration tests.

This module provides common fixtures used across all API test files,
including TestClient setup and CalendarService dependency injection.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_calendar_service
from main import app


@pytest.fixture
def client_with_service(fresh_service):
    """Provide a TestClient with a fresh CalendarService injected.

    Uses FastAPI's dependency override system to inject the test service
    instead of the global one.

    Args:
        fresh_service: A pytest fixture providing a fresh CalendarService.

    Yields:
        A tuple of (TestClient, CalendarService) for testing.

    Example:
        def test_something(client_with_service):
            client, service = client_with_service
            response = client.get("/events")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_calendar_service] = lambda: fresh_service

    client = TestClient(app, raise_server_exceptions=False)

    yield client, fresh_service

    app.dependency_overrides.clear()
