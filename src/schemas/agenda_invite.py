"""Agenda invite schemas.

Paddings and slot sizes travel as duration strings such as ``"30m"`` or
``"1h30m"`` and are parsed into timedeltas here, before reaching the engine.
"""

from datetime import datetime, timedelta
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from src.schemas.common import UTCDatetime
from src.schemas.durations import Duration

# Paddings are stored as signed 64-bit microseconds
MAX_DURATION = timedelta(microseconds=2**63 - 1)


def _non_negative(value: timedelta) -> timedelta:
    if value < timedelta(0):
        raise ValueError("padding must not be negative")
    if value > MAX_DURATION:
        raise ValueError("padding is too large")
    return value


def _positive(value: timedelta) -> timedelta:
    if value <= timedelta(0):
        raise ValueError("slot sizes must be positive")
    if value > MAX_DURATION:
        raise ValueError("slot size is too large")
    return value


Padding = Annotated[Duration, AfterValidator(_non_negative)]
SlotSize = Annotated[Duration, AfterValidator(_positive)]


class AgendaInviteCreate(BaseModel):
    """Schema for creating an agenda invite."""

    user_id: int
    description: str = ""
    expires_at: UTCDatetime
    not_before: UTCDatetime
    not_after: UTCDatetime
    padding_before: Padding = timedelta(0)
    padding_after: Padding = timedelta(0)
    slot_sizes: list[SlotSize] = Field(min_length=1)
    agenda_source_ids: list[int] = []

    @model_validator(mode="after")
    def check_window(self) -> "AgendaInviteCreate":
        if self.not_before > self.not_after:
            raise ValueError("not_before must not be after not_after")
        return self


class AgendaInviteUpdate(BaseModel):
    """Schema for updating an agenda invite. Omitted fields are unchanged."""

    description: str | None = None
    expires_at: UTCDatetime | None = None
    not_before: UTCDatetime | None = None
    not_after: UTCDatetime | None = None
    padding_before: Padding | None = None
    padding_after: Padding | None = None
    slot_sizes: Annotated[list[SlotSize], Field(min_length=1)] | None = None
    agenda_source_ids: list[int] | None = None

    @model_validator(mode="after")
    def check_not_null(self) -> "AgendaInviteUpdate":
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")
        return self


class AgendaInvite(BaseModel):
    """Schema for agenda invite response."""

    model_config = ConfigDict(from_attributes=True)

    resource_id: UUID
    user_id: int
    description: str
    expires_at: datetime
    not_before: datetime
    not_after: datetime
    padding_before: Duration
    padding_after: Duration
    slot_sizes: list[Duration]
    agenda_source_ids: list[int]
    created_at: datetime
    updated_at: datetime


class AgendaItemView(BaseModel):
    """A free slot as shown to an invite viewer."""

    model_config = ConfigDict(populate_by_name=True)

    start_time: datetime = Field(alias="StartTime")
    end_time: datetime = Field(alias="EndTime")
    description: str = Field(alias="Description")
