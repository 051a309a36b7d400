"""Internal HTTP handling utilities for the Calendar Events client.

This module provides the low-level HTTP layer shared by all sub-clients:
request dispatch, translation of the server's ``{"error", "detail", "type"}``
error bodies into client exceptions, and optional retry with exponential
backoff.

This is an internal module and should not be imported directly by users.
"""

import logging
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

# Default backoff settings for retry logic
DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

# Keys of the error body that are not copied into ``details``
_ERROR_ENVELOPE_KEYS = {"error", "detail", "type"}


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract message, error type and details from an error response.

    Understands the server's own error bodies as well as FastAPI's default
    ``{"detail": [...]}`` request validation errors. Falls back to the raw
    response text when the body is not JSON.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    extras = {k: v for k, v in body.items() if k not in _ERROR_ENVELOPE_KEYS}

    if isinstance(detail, list):
        # FastAPI request validation errors
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', ['unknown']))}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return "; ".join(messages), "RequestValidationError", {"validation_errors": detail}
    if isinstance(detail, str):
        return detail, body.get("type"), extras or None
    if "error" in body:
        return str(body["error"]), body.get("type"), extras or None
    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Args:
        response: The HTTP response to check.

    Raises:
        ValidationError: For HTTP 422 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code == 422:
        raise ValidationError(
            message=message,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )
    if status_code == 404:
        raise NotFoundError(
            message=message,
            resource_id=(details or {}).get("record_id"),
            error_type=error_type,
            details=details,
            response_body=response_body,
        )
    if status_code == 409:
        raise ConflictError(
            message=message,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )
    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )
    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay (base * 2^attempt), capped at DEFAULT_RETRY_BACKOFF_MAX.

    Args:
        attempt: The retry attempt number (0-indexed).
        base: Base delay in seconds.

    Returns:
        The delay in seconds before the next retry.
    """
    return min(base * (2 ** attempt), DEFAULT_RETRY_BACKOFF_MAX)


class HTTPClient:
    """Synchronous HTTP client for the Calendar Events API.

    Wraps httpx.Client with error translation and retry logic.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., one wrapping a TestClient).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _should_retry(self, attempt: int, attempts: int) -> bool:
        return self.retry_enabled and attempt < attempts - 1

    def _backoff(self, attempt: int, reason: str) -> None:
        delay = _calculate_backoff(attempt)
        logger.debug(f"Retrying after {reason} (attempt {attempt + 1}, sleeping {delay}s)")
        time.sleep(delay)

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Args:
            method: The HTTP method (GET, POST, etc.).
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1

        for attempt in range(attempts):
            try:
                response = self._client.request(
                    method=method,
                    url=path,
                    params=params,
                    json=json,
                )
            except httpx.ConnectError as e:
                if not self._should_retry(attempt, attempts):
                    raise ConnectionError(
                        message=f"Failed to connect to {url}", url=url, cause=e
                    ) from e
                self._backoff(attempt, "connection error")
                continue
            except httpx.TimeoutException as e:
                if not self._should_retry(attempt, attempts):
                    raise TimeoutError(
                        message=f"Request to {url} timed out",
                        timeout=self.timeout,
                        url=url,
                    ) from e
                self._backoff(attempt, "timeout")
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and self._should_retry(
                attempt, attempts
            ):
                self._backoff(attempt, f"HTTP {response.status_code}")
                continue

            _raise_for_status(response)

            if response.content:
                return response.json()
            return None

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self.request("PUT", path, params=params, json=json)

    def patch(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self.request("PATCH", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)
