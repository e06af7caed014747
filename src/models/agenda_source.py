"""Agenda source model for external calendars."""

import uuid
from enum import Enum

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class AgendaSourceType(str, Enum):
    """Kind of external calendar."""

    PROTON = "proton"


class AgendaSource(Base, TimestampMixin):
    """AgendaSource model for external calendars a user has registered."""

    __tablename__ = "agenda_sources"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    resource_id: Mapped[uuid.UUID] = mapped_column(Uuid, default=uuid.uuid4, unique=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(String(2048))
    type: Mapped[str] = mapped_column(String(50), default=AgendaSourceType.PROTON.value)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="agenda_sources")  # noqa: F821
    agenda_items: Mapped[list["AgendaItem"]] = relationship(  # noqa: F821
        back_populates="agenda_source", cascade="all, delete-orphan"
    )
    agenda_invites: Mapped[list["AgendaInvite"]] = relationship(  # noqa: F821
        secondary="invite_sources", back_populates="agenda_sources"
    )

    __table_args__ = (
        Index("idx_agenda_sources_user_id", "user_id"),
        Index("idx_agenda_sources_updated_at", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<AgendaSource(id={self.id}, type='{self.type}')>"
