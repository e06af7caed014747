"""SQLAlchemy ORM models."""

from src.models.agenda_invite import AgendaInvite, invite_sources
from src.models.agenda_item import AgendaItem
from src.models.agenda_source import AgendaSource, AgendaSourceType
from src.models.user import User

__all__ = [
    "AgendaInvite",
    "AgendaItem",
    "AgendaSource",
    "AgendaSourceType",
    "User",
    "invite_sources",
]
