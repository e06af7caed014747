"""Agenda source schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, HttpUrl

from src.models.agenda_source import AgendaSourceType


class AgendaSourceCreate(BaseModel):
    """Schema for creating an agenda source."""

    user_id: int
    url: HttpUrl
    type: AgendaSourceType = AgendaSourceType.PROTON


class AgendaSourceUpdate(BaseModel):
    """Schema for updating an agenda source. Only url and type can change."""

    url: HttpUrl | None = None
    type: AgendaSourceType | None = None


class AgendaSource(BaseModel):
    """Schema for agenda source response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    resource_id: UUID
    user_id: int
    url: str
    type: AgendaSourceType
    created_at: datetime
    updated_at: datetime
