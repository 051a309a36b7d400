"""Exception hierarchy for the Calendar Events API client.

Exception Hierarchy:
    CalendarClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── ValidationError (HTTP 422, including invalid recurrence rules)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        └── ServerError (HTTP 5xx)

Other 4xx responses (for example expanding a non-recurring event, or an
inverted date range) raise a plain APIError whose ``error_type`` carries the
server-side exception name, e.g. ``"NotRecurringError"``.

Example:
    Catching specific errors::

        try:
            client.events.instances(event_id, "2024-01-01", "2024-01-31")
        except NotFoundError:
            print("No such event")
        except APIError as e:
            if e.error_type == "NotRecurringError":
                print("Event does not repeat")
"""

from typing import Any


class CalendarClientError(Exception):
    """Base exception for all Calendar Events client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(CalendarClientError):
    """Failed to connect to the Calendar Events server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(CalendarClientError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(CalendarClientError):
    """Server returned an error response.

    Attributes:
        message: The ``detail`` of the error body.
        status_code: HTTP status code from the server.
        error_type: The ``type`` of the error body (server exception name).
        details: Extra fields of the error body (validation errors, record ID).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ValidationError(APIError):
    """Request validation failed (HTTP 422).

    Raised for malformed request bodies and for recurrence rules that the
    server rejects, e.g. a ``day_of_month`` on a weekly rule.

    Example:
        try:
            client.events.create(title="x", start_date=start, recurrence={"frequency": "hourly"})
        except ValidationError as e:
            for error in e.validation_errors:
                print(error["loc"], error["msg"])
    """

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_type=error_type or "validation_error",
            details=details,
            response_body=response_body,
        )

    @property
    def validation_errors(self) -> list[dict[str, Any]]:
        """Field-level errors reported by the server, if any."""
        return (self.details or {}).get("validation_errors", [])


class NotFoundError(APIError):
    """Resource not found (HTTP 404).

    Attributes:
        resource_id: The identifier that wasn't found (if reported).
    """

    def __init__(
        self,
        message: str,
        resource_id: str | None = None,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.resource_id = resource_id
        super().__init__(
            message=message,
            status_code=404,
            error_type=error_type or "not_found",
            details=details,
            response_body=response_body,
        )


class ConflictError(APIError):
    """Uniqueness conflict (HTTP 409), e.g. a participant email already in use."""

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_type=error_type or "conflict",
            details=details,
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    If retry logic is enabled, 502/503/504 responses are retried before this
    is raised.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type=error_type or "server_error",
            details=details,
            response_body=response_body,
        )
