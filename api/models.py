"""Shared request and response models for API endpoints.

This module contains models used by more than one router: a generic list
wrapper, the delete confirmation, and the request body naming a single date.
"""

import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


# Generic type variable for list items
ItemT = TypeVar("ItemT")


class ListResponse(BaseModel, Generic[ItemT]):
    """Response model for collection endpoints.

    Attributes:
        items: The records returned.
        count: Number of records returned.
    """

    items: list[ItemT]
    count: int

    @classmethod
    def of(cls, items: list) -> "ListResponse":
        return cls(items=items, count=len(items))


class DeleteResponse(BaseModel):
    """Response model for delete endpoints.

    Attributes:
        id: ID of the deleted record.
        deleted: Always True.
        message: Human-readable message describing the result.
    """

    id: str
    deleted: bool = True
    message: str


class DateRequest(BaseModel):
    """Request body naming one calendar date.

    Args:
        date: Calendar date (YYYY-MM-DD).
    """

    date: datetime.date = Field(description="Calendar date (YYYY-MM-DD)")
