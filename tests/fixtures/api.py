"""Shared fixtures for API testing.

These fixtures provide a TestClient and a fresh CalendarService instance
for each test, ensuring test isolation.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from models.service import CalendarService


@pytest.fixture
def test_client():
    """Provide a FastAPI TestClient for making API requests.

    Entering the client runs the app lifespan, so the global CalendarService
    is initialized for the duration of the test.

    Yields:
        A FastAPI TestClient instance.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def fresh_service():
    """Provide a fresh, empty CalendarService for each test.

    Uses a small iteration bound so runaway expansions show up quickly.

    Returns:
        A newly initialized CalendarService.
    """
    return CalendarService(max_iterations=5000)
