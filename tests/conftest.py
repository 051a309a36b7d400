"""Pytest configuration and shared fixtures."""

import pytest

# Load environment variables from .env file at test startup
# so CALENDAR_* settings are in place before fixtures are created
from dotenv import load_dotenv
load_dotenv()

from config import reset_settings

# Import all fixtures from fixture modules
pytest_plugins = [
    "tests.fixtures.events",
    "tests.fixtures.api",
]


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so monkeypatched env vars take effect."""
    reset_settings()
    yield
    reset_settings()
