"""Main Calendar Events client class.

CalendarClient is the entry point for talking to the Calendar Events API.
It provides namespaced access to the endpoints through sub-client properties
(``client.events``, ``client.categories``, ``client.participants``).

Example:
    Synchronous usage::

        from client import CalendarClient

        with CalendarClient(base_url="http://localhost:8000") as client:
            event = client.events.create(
                title="Gym",
                start_date=datetime(2024, 1, 1, 18, 0),
                recurrence={"frequency": "daily", "interval": 2},
            )
            for instance in client.events.instances(event.id, "2024-01-01", "2024-01-31"):
                print(instance.id, instance.start_date)
"""

from typing import Any

from client._categories import CategoriesClient
from client._events import EventsClient
from client._http import HTTPClient
from client._participants import ParticipantsClient
from client.models import HealthResponse


class CalendarClient:
    """Synchronous client for the Calendar Events REST API.

    Supports the context manager protocol for automatic resource cleanup.

    Attributes:
        base_url: The base URL of the server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the server (default: http://localhost:8000).
            timeout: Request timeout in seconds (default: 30.0).
            retry_enabled: Whether to automatically retry on transient failures.
                Retries on connection errors, timeouts, and HTTP 502/503/504
                with exponential backoff (default: False).
            max_retries: Maximum number of retry attempts when retry is enabled
                (default: 3).
            transport: Custom HTTP transport (e.g., for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        # Sub-clients are created on first access
        self._events: EventsClient | None = None
        self._categories: CategoriesClient | None = None
        self._participants: ParticipantsClient | None = None

    def __enter__(self) -> "CalendarClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    @property
    def events(self) -> EventsClient:
        """Access event and recurrence endpoints (/events/*, /recurrence/*)."""
        if self._events is None:
            self._events = EventsClient(self._http)
        return self._events

    @property
    def categories(self) -> CategoriesClient:
        """Access category endpoints (/categories/*)."""
        if self._categories is None:
            self._categories = CategoriesClient(self._http)
        return self._categories

    @property
    def participants(self) -> ParticipantsClient:
        """Access participant endpoints (/participants/*)."""
        if self._participants is None:
            self._participants = ParticipantsClient(self._http)
        return self._participants

    def health(self) -> HealthResponse:
        """Check that the server is up."""
        return HealthResponse(**self._http.get("/health"))
