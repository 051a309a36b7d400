"""Participant endpoints.

Provides REST API for the people that can be invited to events.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import CalendarServiceDep
from api.models import DeleteResponse, ListResponse
from models.entities import Participant, ParticipantStatus

router = APIRouter(
    prefix="/participants",
    tags=["participants"],
)


# Request Models


class CreateParticipantRequest(BaseModel):
    """Request to create a participant.

    Args:
        name: Full name.
        email: Email address (must be unique).
        avatar: Profile picture URL.
        role: Job role.
        department: Department name.
        status: Invitation status.
    """

    name: str = Field(description="Full name")
    email: str = Field(description="Email address")
    avatar: Optional[str] = Field(default=None, description="Profile picture URL")
    role: Optional[str] = Field(default=None, description="Role")
    department: Optional[str] = Field(default=None, description="Department")
    status: ParticipantStatus = Field(default="pending", description="Status")


class UpdateParticipantRequest(BaseModel):
    """Request to update a participant. Only fields present are changed."""

    name: Optional[str] = Field(default=None, description="Full name")
    email: Optional[str] = Field(default=None, description="Email address")
    avatar: Optional[str] = Field(default=None, description="Profile picture URL")
    role: Optional[str] = Field(default=None, description="Role")
    department: Optional[str] = Field(default=None, description="Department")
    status: Optional[ParticipantStatus] = Field(default=None, description="Status")


class StatusRequest(BaseModel):
    """Request to change a participant's invitation status."""

    status: ParticipantStatus = Field(description="Status")


# Route Handlers


@router.post("", response_model=Participant, status_code=201)
async def create_participant(
    request: CreateParticipantRequest, service: CalendarServiceDep
):
    """Create a new participant."""
    return service.create_participant(request.model_dump())


@router.get("", response_model=ListResponse[Participant])
async def list_participants(
    service: CalendarServiceDep,
    q: Optional[str] = None,
    department: Optional[str] = None,
):
    """List participants ordered by name.

    Args:
        service: Calendar service dependency.
        q: Only participants whose name or email contains this text.
        department: Only participants in this department.

    Returns:
        The participants.
    """
    if q:
        participants = service.search_participants(q)
    else:
        participants = service.list_participants()
    if department is not None:
        participants = [p for p in participants if p.department == department]
    return ListResponse[Participant].of(participants)


@router.get("/departments", response_model=list[str])
async def list_departments(service: CalendarServiceDep):
    """List the distinct departments of all participants."""
    return service.departments()


@router.get("/{participant_id}", response_model=Participant)
async def get_participant(participant_id: str, service: CalendarServiceDep):
    """Get a single participant by ID."""
    return service.get_participant(participant_id)


@router.patch("/{participant_id}", response_model=Participant)
async def update_participant(
    participant_id: str, request: UpdateParticipantRequest, service: CalendarServiceDep
):
    """Update a participant."""
    return service.update_participant(
        participant_id, request.model_dump(exclude_unset=True)
    )


@router.put("/{participant_id}/status", response_model=Participant)
async def update_participant_status(
    participant_id: str, request: StatusRequest, service: CalendarServiceDep
):
    """Change a participant's invitation status."""
    return service.update_participant_status(participant_id, request.status)


@router.delete("/{participant_id}", response_model=DeleteResponse)
async def delete_participant(participant_id: str, service: CalendarServiceDep):
    """Delete a participant and remove them from all events."""
    deleted = service.delete_participant(participant_id)
    return DeleteResponse(id=deleted.id, message=f"Deleted participant: {deleted.name}")
