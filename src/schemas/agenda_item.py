"""Agenda item schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator

from src.schemas.common import UTCDatetime


class AgendaItemUpsert(BaseModel):
    """Schema for creating an agenda item, or replacing one by resource_id."""

    resource_id: UUID | None = None
    user_id: int
    agenda_source_id: int
    start_time: UTCDatetime
    end_time: UTCDatetime
    description: str = ""

    @model_validator(mode="after")
    def check_time_order(self) -> "AgendaItemUpsert":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AgendaItem(BaseModel):
    """Schema for agenda item response."""

    model_config = ConfigDict(from_attributes=True)

    resource_id: UUID
    user_id: int
    agenda_source_id: int
    start_time: datetime
    end_time: datetime
    description: str
    created_at: datetime
    updated_at: datetime
