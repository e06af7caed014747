"""Read access to invites and busy time for the availability engine.

The engine only talks to the ``AgendaRepository`` protocol. Relations are
exchanged as ids, never as ORM object graphs.
"""

import uuid
from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from sqlalchemy.orm import Session, selectinload

from src.models.agenda_invite import AgendaInvite
from src.models.agenda_item import AgendaItem
from src.models.agenda_source import AgendaSource
from src.services.intervals import BusyInterval


@dataclass(frozen=True)
class InviteRecord:
    """Snapshot of an agenda invite as read by the engine."""

    id: uuid.UUID
    owner_user_id: int
    expires_at: datetime
    not_before: datetime
    not_after: datetime
    padding_before: timedelta
    padding_after: timedelta
    slot_sizes: tuple[timedelta, ...]
    source_ids: tuple[int, ...]


class AgendaRepository(Protocol):
    """Persistence operations the engine depends on."""

    def load_invite(self, invite_id: uuid.UUID) -> InviteRecord | None:
        """Return the invite, or None if it does not exist."""
        ...

    def source_owners(self, source_ids: Collection[int]) -> dict[int, int]:
        """Map each existing source id to its owning user id."""
        ...

    def load_busy_intervals(
        self, user_id: int, source_ids: Collection[int]
    ) -> list[BusyInterval]:
        """Return the user's busy intervals belonging to the given sources."""
        ...


class SqlAlchemyAgendaRepository:
    """AgendaRepository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def load_invite(self, invite_id: uuid.UUID) -> InviteRecord | None:
        invite = (
            self.db.query(AgendaInvite)
            .options(selectinload(AgendaInvite.agenda_sources))
            .filter(AgendaInvite.resource_id == invite_id)
            .first()
        )
        if invite is None:
            return None

        return InviteRecord(
            id=invite.resource_id,
            owner_user_id=invite.user_id,
            expires_at=invite.expires_at,
            not_before=invite.not_before,
            not_after=invite.not_after,
            padding_before=invite.padding_before,
            padding_after=invite.padding_after,
            slot_sizes=tuple(invite.slot_sizes),
            source_ids=tuple(invite.agenda_source_ids),
        )

    def source_owners(self, source_ids: Collection[int]) -> dict[int, int]:
        if not source_ids:
            return {}
        rows = (
            self.db.query(AgendaSource.id, AgendaSource.user_id)
            .filter(AgendaSource.id.in_(source_ids))
            .all()
        )
        return {source_id: user_id for source_id, user_id in rows}

    def load_busy_intervals(
        self, user_id: int, source_ids: Collection[int]
    ) -> list[BusyInterval]:
        if not source_ids:
            return []
        items = (
            self.db.query(AgendaItem)
            .filter(
                AgendaItem.user_id == user_id,
                AgendaItem.agenda_source_id.in_(source_ids),
            )
            .order_by(AgendaItem.start_time, AgendaItem.end_time)
            .all()
        )
        return [
            BusyInterval(
                id=item.id,
                owner_user_id=item.user_id,
                source_id=item.agenda_source_id,
                start=item.start_time,
                end=item.end_time,
            )
            for item in items
        ]
