"""Agenda item model for busy time ingested from agenda sources."""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.types import UTCDateTime


class AgendaItem(Base, TimestampMixin):
    """AgendaItem model for storing busy intervals.

    Items are replaced by ``resource_id`` when a source is re-ingested.
    """

    __tablename__ = "agenda_items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    resource_id: Mapped[uuid.UUID] = mapped_column(Uuid, default=uuid.uuid4, unique=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    agenda_source_id: Mapped[int] = mapped_column(
        ForeignKey("agenda_sources.id", ondelete="CASCADE"), nullable=False
    )
    start_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")

    # Relationships
    agenda_source: Mapped["AgendaSource"] = relationship(  # noqa: F821
        back_populates="agenda_items"
    )

    __table_args__ = (
        Index("idx_agenda_items_start_time", "start_time"),
        Index("idx_agenda_items_user_source", "user_id", "agenda_source_id"),
    )

    def __repr__(self) -> str:
        return f"<AgendaItem(id={self.id}, start_time='{self.start_time}')>"
