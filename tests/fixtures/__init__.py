"""Test fixtures for the Calendar Events API.

This package provides reusable test fixtures:
- events: Factories and fixtures for events, categories and participants
- api: TestClient and fresh CalendarService fixtures
"""
