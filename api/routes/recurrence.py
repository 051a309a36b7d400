"""Recurrence helper endpoints.

Provides the preset rules offered when making an event recurring, and a
describe endpoint that validates a rule and renders it as text.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from models.describe import describe_rule, recurrence_presets
from models.recurrence import build_rule

router = APIRouter(
    prefix="/recurrence",
    tags=["recurrence"],
)


class RecurrencePreset(BaseModel):
    """A preset recurrence rule.

    Args:
        label: Short label for menus.
        rule: The rule.
        description: Full description of the rule.
    """

    label: str
    rule: dict[str, Any]
    description: str


class DescribeResponse(BaseModel):
    """Response model for rule descriptions.

    Args:
        rule: The validated rule, with defaults filled in.
        description: Human-readable description.
    """

    rule: dict[str, Any]
    description: str


@router.get("/presets", response_model=list[RecurrencePreset])
async def get_presets():
    """List the preset recurrence rules."""
    return recurrence_presets()


@router.post("/describe", response_model=DescribeResponse)
async def describe(rule: dict[str, Any]):
    """Validate a recurrence rule and describe it.

    Args:
        rule: Raw rule, e.g. ``{"frequency": "monthly", "day_of_month": 15}``.

    Returns:
        The validated rule and its description.
    """
    validated = build_rule(rule)
    return DescribeResponse(
        rule=validated.model_dump(mode="json", exclude_none=True),
        description=describe_rule(validated),
    )
