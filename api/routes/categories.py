"""Category endpoints.

Provides REST API for event categories, including visibility toggling and
creation of the default category set.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import CalendarServiceDep
from api.models import DeleteResponse, ListResponse
from models.entities import Category

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)


# Request Models


class CreateCategoryRequest(BaseModel):
    """Request to create a category.

    Args:
        name: Display name.
        color: Hex color code.
        icon: Emoji or short icon identifier.
        is_visible: Whether the category's events are shown.
        description: Optional description.
    """

    name: str = Field(description="Display name")
    color: str = Field(description="Hex color code")
    icon: str = Field(default="", description="Emoji or icon id")
    is_visible: bool = Field(default=True, description="Whether visible")
    description: Optional[str] = Field(default=None, description="Description")


class UpdateCategoryRequest(BaseModel):
    """Request to update a category. Only fields present are changed."""

    name: Optional[str] = Field(default=None, description="Display name")
    color: Optional[str] = Field(default=None, description="Hex color code")
    icon: Optional[str] = Field(default=None, description="Emoji or icon id")
    is_visible: Optional[bool] = Field(default=None, description="Whether visible")
    description: Optional[str] = Field(default=None, description="Description")


class VisibilityRequest(BaseModel):
    """Request to set category visibility.

    Args:
        is_visible: New visibility.
    """

    is_visible: bool = Field(description="Whether visible")


# Route Handlers


@router.post("", response_model=Category, status_code=201)
async def create_category(request: CreateCategoryRequest, service: CalendarServiceDep):
    """Create a new category."""
    return service.create_category(request.model_dump())


@router.get("", response_model=ListResponse[Category])
async def list_categories(service: CalendarServiceDep, visible_only: bool = False):
    """List categories ordered by name.

    Args:
        service: Calendar service dependency.
        visible_only: Only return visible categories.

    Returns:
        The categories.
    """
    if visible_only:
        return ListResponse[Category].of(service.visible_categories())
    return ListResponse[Category].of(service.list_categories())


@router.post("/defaults", response_model=ListResponse[Category], status_code=201)
async def create_default_categories(service: CalendarServiceDep):
    """Create the default categories that do not exist yet.

    Returns:
        The categories created by this call (empty if all already exist).
    """
    return ListResponse[Category].of(service.create_default_categories())


@router.get("/{category_id}", response_model=Category)
async def get_category(category_id: str, service: CalendarServiceDep):
    """Get a single category by ID."""
    return service.get_category(category_id)


@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: str, request: UpdateCategoryRequest, service: CalendarServiceDep
):
    """Update a category."""
    return service.update_category(category_id, request.model_dump(exclude_unset=True))


@router.put("/{category_id}/visibility", response_model=Category)
async def set_category_visibility(
    category_id: str, request: VisibilityRequest, service: CalendarServiceDep
):
    """Show or hide a category."""
    return service.set_category_visibility(category_id, request.is_visible)


@router.post("/{category_id}/toggle", response_model=Category)
async def toggle_category_visibility(category_id: str, service: CalendarServiceDep):
    """Flip a category's visibility."""
    return service.toggle_category_visibility(category_id)


@router.delete("/{category_id}", response_model=DeleteResponse)
async def delete_category(category_id: str, service: CalendarServiceDep):
    """Delete a category. Its events are kept without a category."""
    deleted = service.delete_category(category_id)
    return DeleteResponse(id=deleted.id, message=f"Deleted category: {deleted.name}")
