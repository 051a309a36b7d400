"""Categories sub-client for the Calendar Events API (/categories/*)."""

from typing import Any

from client._base import BaseClient
from client.models import Category, DeleteResponse


class CategoriesClient(BaseClient):
    """Synchronous client for category endpoints (/categories/*).

    Example:
        with CalendarClient() as client:
            client.categories.create_defaults()
            work = next(c for c in client.categories.all() if c.name == "Work")
            client.categories.toggle(work.id)
    """

    _BASE_PATH = "/categories"

    def create(self, name: str, color: str, icon: str = "", **fields: Any) -> Category:
        """Create a category.

        Args:
            name: Display name.
            color: Hex color code (``#rrggbb``).
            icon: Emoji or short icon identifier.
            **fields: ``is_visible`` and ``description``.

        Raises:
            ValidationError: If a field is invalid.
        """
        body = {"name": name, "color": color, "icon": icon, **fields}
        return Category(**self._post(self._BASE_PATH, json=body))

    def all(self, visible_only: bool = False) -> list[Category]:
        """List categories ordered by name."""
        data = self._get(self._BASE_PATH, params={"visible_only": visible_only})
        return [Category(**item) for item in data["items"]]

    def get(self, category_id: str) -> Category:
        return Category(**self._get(self._path(category_id)))

    def update(self, category_id: str, **fields: Any) -> Category:
        return Category(**self._patch(self._path(category_id), json=fields))

    def set_visibility(self, category_id: str, is_visible: bool) -> Category:
        data = self._put(self._path(category_id, "visibility"), json={"is_visible": is_visible})
        return Category(**data)

    def toggle(self, category_id: str) -> Category:
        return Category(**self._post(self._path(category_id, "toggle")))

    def delete(self, category_id: str) -> DeleteResponse:
        """Delete a category; its events are kept without a category."""
        return DeleteResponse(**self._delete(self._path(category_id)))

    def create_defaults(self) -> list[Category]:
        """Create the default categories that do not exist yet.

        Returns:
            The categories created by this call.
        """
        data = self._post(self._path("defaults"))
        return [Category(**item) for item in data["items"]]
