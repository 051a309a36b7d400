"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to shared resources like the CalendarService.
"""

import logging
from typing import Annotated

from fastapi import Depends

from config import get_settings
from models.service import CalendarService

logger = logging.getLogger(__name__)


# Global state
# A single shared service (and its in-memory stores) is created when the app starts
_calendar_service: CalendarService | None = None


def get_calendar_service() -> CalendarService:
    """Get the shared CalendarService instance.

    This function is a FastAPI dependency. When you add it to a route handler's
    parameters, FastAPI will automatically call this function and inject the result.

    Returns:
        The shared CalendarService instance.

    Raises:
        RuntimeError: If the service hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(service: CalendarServiceDep):
            return service.list_categories()
    """
    global _calendar_service

    if _calendar_service is None:
        raise RuntimeError(
            "CalendarService not initialized. Call initialize_calendar_service() first."
        )

    return _calendar_service


def initialize_calendar_service() -> CalendarService:
    """Initialize the shared CalendarService instance.

    This should be called once when the FastAPI app starts up. Creates empty
    stores and, when CALENDAR_SEED_DEFAULTS is set, the default categories.

    Returns:
        The newly created CalendarService instance.
    """
    global _calendar_service

    settings = get_settings()
    _calendar_service = CalendarService(max_iterations=settings.max_iterations)

    if settings.seed_defaults:
        created = _calendar_service.create_default_categories()
        logger.info(f"Seeded {len(created)} default categories")

    return _calendar_service


def shutdown_calendar_service():
    """Drop the CalendarService and everything it stores.

    This should be called when the FastAPI app shuts down.
    """
    global _calendar_service

    if _calendar_service is not None:
        _calendar_service.clear()

    _calendar_service = None


# Type alias for dependency injection
# This makes the type annotation cleaner in route handlers
CalendarServiceDep = Annotated[CalendarService, Depends(get_calendar_service)]
