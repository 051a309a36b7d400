"""Exception handlers for the Calendar Events FastAPI application.

This module converts domain exceptions from models/errors.py (and a few
built-in ones) into consistent JSON responses of the form
``{"error": ..., "detail": ..., "type": ...}``.
"""

import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.errors import (
    DuplicateRecordError,
    InvalidRuleError,
    InvalidWindowError,
    NotFoundError,
    NotRecurringError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, exc: Exception, detail: str, **extra):
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {
                "error": error,
                "detail": detail,
                "type": type(exc).__name__,
                **extra,
            }
        ),
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    """Handle NotFoundError exceptions (events, categories, participants, occurrences).

    Args:
        request: The incoming request that triggered the error.
        exc: The NotFoundError exception.

    Returns:
        JSONResponse with 404 status.
    """
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        f"{exc.kind} Not Found",
        exc,
        exc.message,
        record_id=exc.record_id,
    )


async def not_recurring_handler(request: Request, exc: NotRecurringError):
    """Handle NotRecurringError exceptions.

    Returns a 400 because the operation only makes sense for recurring events.
    """
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "Not Recurring", exc, exc.message, event_id=exc.event_id
    )


async def invalid_rule_handler(request: Request, exc: InvalidRuleError):
    """Handle InvalidRuleError exceptions.

    Returns a 422 with the structured validation errors of the rule.
    """
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Invalid Recurrence Rule",
        exc,
        exc.message,
        validation_errors=exc.errors,
    )


async def invalid_window_handler(request: Request, exc: InvalidWindowError):
    """Handle InvalidWindowError exceptions (unparseable or inverted date ranges)."""
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid Window", exc, exc.message)


async def duplicate_record_handler(request: Request, exc: DuplicateRecordError):
    """Handle DuplicateRecordError exceptions with a 409 (Conflict)."""
    return _error_response(status.HTTP_409_CONFLICT, "Conflict", exc, exc.message)


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors.

    These occur when data fails model validation inside the service, after
    FastAPI has already accepted the request body.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation Error",
        exc,
        "The request data failed validation",
        validation_errors=exc.errors(include_url=False, include_context=False),
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    ValueErrors typically indicate invalid input values that passed Pydantic
    validation but failed business logic validation.
    """
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid Value", exc, str(exc))


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It logs the traceback
    and prevents stack traces from being exposed to clients.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        exc,
        "An unexpected error occurred",
    )
