"""Public view of an agenda invite.

Anyone holding the invite id may call this endpoint, so every refusal
produces the same response, whether the invite is missing, expired or
otherwise unusable.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.dependencies import get_invite_guard
from src.schemas.agenda_invite import AgendaItemView
from src.schemas.common import UTCDatetime
from src.services.errors import AgendaError, ExpiredError, NotFoundError
from src.services.intervals import utcnow
from src.services.invite_policy import InvitePolicyGuard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/view-agenda-invite", tags=["agenda-invites"])


@router.get("/{invite_id}", response_model=list[AgendaItemView])
def view_agenda_invite(
    invite_id: UUID,
    date_from: UTCDatetime | None = Query(None, alias="DateFrom", description="Start of range"),
    date_to: UTCDatetime | None = Query(None, alias="DateTo", description="End of range"),
    guard: InvitePolicyGuard = Depends(get_invite_guard),
) -> list[AgendaItemView]:
    """List the free slots shared through an agenda invite."""
    try:
        views = guard.view_invite(invite_id, date_from, date_to, now=utcnow())
    except (NotFoundError, ExpiredError) as e:
        raise HTTPException(status_code=404, detail="Agenda invite not found") from e
    except AgendaError as e:
        logger.warning(f"Refused view of agenda invite {invite_id}: {e}")
        raise HTTPException(status_code=404, detail="Agenda invite not found") from e

    return [
        AgendaItemView(start_time=view.start, end_time=view.end, description=view.description)
        for view in views
    ]
