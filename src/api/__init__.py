"""API routers."""

from src.api.agenda_invites import router as agenda_invites_router
from src.api.agenda_items import router as agenda_items_router
from src.api.agenda_sources import router as agenda_sources_router
from src.api.health import router as health_router
from src.api.users import router as users_router
from src.api.view_invite import router as view_invite_router

__all__ = [
    "agenda_invites_router",
    "agenda_items_router",
    "agenda_sources_router",
    "health_router",
    "users_router",
    "view_invite_router",
]
