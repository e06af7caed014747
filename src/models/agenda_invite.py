"""Agenda invite model for shareable availability views."""

import uuid
from datetime import datetime, timedelta

from sqlalchemy import Column, ForeignKey, Index, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.types import DurationListType, DurationType, UTCDateTime

# Sources whose busy time counts toward an invite's availability
invite_sources = Table(
    "invite_sources",
    Base.metadata,
    Column(
        "agenda_invite_id",
        ForeignKey("agenda_invites.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "agenda_source_id",
        ForeignKey("agenda_sources.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class AgendaInvite(Base, TimestampMixin):
    """AgendaInvite model for availability shared with a third party.

    The invite is addressed publicly by ``resource_id``. Expiry is checked
    whenever the invite is viewed; expired invites are kept until purged.
    """

    __tablename__ = "agenda_invites"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    resource_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, default=uuid.uuid4, unique=True, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    description: Mapped[str] = mapped_column(Text, default="")
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    not_before: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    not_after: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    padding_before: Mapped[timedelta] = mapped_column(DurationType, default=timedelta(0))
    padding_after: Mapped[timedelta] = mapped_column(DurationType, default=timedelta(0))
    slot_sizes: Mapped[list[timedelta]] = mapped_column(DurationListType, nullable=False)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="agenda_invites")  # noqa: F821
    agenda_sources: Mapped[list["AgendaSource"]] = relationship(  # noqa: F821
        secondary=invite_sources, back_populates="agenda_invites"
    )

    __table_args__ = (
        Index("idx_agenda_invites_user_id", "user_id"),
        Index("idx_agenda_invites_expires_at", "expires_at"),
    )

    @property
    def agenda_source_ids(self) -> list[int]:
        return sorted(source.id for source in self.agenda_sources)

    def __repr__(self) -> str:
        return f"<AgendaInvite(id={self.id}, expires_at='{self.expires_at}')>"
