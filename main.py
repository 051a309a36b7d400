"""Main entry point for the Calendar Events FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API for events, categories and participants, including expansion of
recurring events into occurrence instances.

To run the development server:
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_calendar_service, shutdown_calendar_service
from api.exceptions import (
    duplicate_record_handler,
    generic_exception_handler,
    invalid_rule_handler,
    invalid_window_handler,
    not_found_handler,
    not_recurring_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import categories as categories_routes
from api.routes import events as events_routes
from api.routes import participants as participants_routes
from api.routes import recurrence as recurrence_routes
from config import get_settings
from models.errors import (
    DuplicateRecordError,
    InvalidRuleError,
    InvalidWindowError,
    NotFoundError,
    NotRecurringError,
)

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    This context manager runs code at startup (before yield) and shutdown (after yield).

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    # Startup: configure logging and create the service
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Calendar Events API - initializing CalendarService")
    initialize_calendar_service()

    yield  # App runs and handles requests here

    # Shutdown: Clean up resources
    logger.info("Shutting down Calendar Events API")
    shutdown_calendar_service()


# Create the FastAPI application instance
app = FastAPI(
    title="Calendar Events API",
    description="Events, categories and participants with recurring event expansion",
    version=VERSION,
    lifespan=lifespan,  # Register the lifespan handler
)

# Register exception handlers
# These convert Python exceptions into clean JSON responses
# Order matters: specific exceptions before general ones
app.add_exception_handler(NotFoundError, not_found_handler)
app.add_exception_handler(NotRecurringError, not_recurring_handler)
app.add_exception_handler(InvalidRuleError, invalid_rule_handler)
app.add_exception_handler(InvalidWindowError, invalid_window_handler)
app.add_exception_handler(DuplicateRecordError, duplicate_record_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
# Each router groups related endpoints together
app.include_router(events_routes.router)
app.include_router(categories_routes.router)
app.include_router(participants_routes.router)
app.include_router(recurrence_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Calendar Events API",
        "version": VERSION,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
