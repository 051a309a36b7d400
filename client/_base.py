"""Base class for all sub-clients.

This is an internal module and should not be imported directly by users.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from client._http import HTTPClient


def to_json_value(value: Any) -> Any:
    """Convert dates and datetimes (also inside lists and dicts) to ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value


class BaseClient:
    """Base class for the synchronous sub-clients.

    Sub-clients (EventsClient, CategoriesClient, ParticipantsClient) share
    one HTTPClient and address their routes relative to ``_BASE_PATH``.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    _BASE_PATH = ""

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _path(self, *parts: str) -> str:
        return "/".join([self._BASE_PATH, *parts]) if parts else self._BASE_PATH

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.get(path, params=to_json_value(params))

    def _post(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self._http.post(path, json=to_json_value(json), params=params)

    def _put(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self._http.put(path, json=to_json_value(json), params=params)

    def _patch(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self._http.patch(path, json=to_json_value(json), params=params)

    def _delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.delete(path, params=params)
