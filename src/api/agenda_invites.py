"""Agenda invite API endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import authorize_sources, get_aggregator, require_user
from src.database import get_db
from src.models.agenda_invite import AgendaInvite as AgendaInviteModel
from src.models.agenda_source import AgendaSource as AgendaSourceModel
from src.schemas.agenda_invite import AgendaInvite, AgendaInviteCreate, AgendaInviteUpdate
from src.schemas.common import Page, Pagination
from src.services.aggregator import SourceAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/agenda-invites", tags=["agenda-invites"])


def _get_owned_invite(
    db: Session, resource_id: UUID, user_id: int, for_update: bool = False
) -> AgendaInviteModel:
    query = db.query(AgendaInviteModel).filter(
        AgendaInviteModel.resource_id == resource_id,
        AgendaInviteModel.user_id == user_id,
    )
    if for_update:
        query = query.with_for_update()
    invite = query.first()
    if not invite:
        raise HTTPException(status_code=404, detail="Agenda invite not found")
    return invite


def _load_sources(db: Session, source_ids: tuple[int, ...]) -> list[AgendaSourceModel]:
    if not source_ids:
        return []
    return db.query(AgendaSourceModel).filter(AgendaSourceModel.id.in_(source_ids)).all()


@router.post("/", response_model=AgendaInvite, status_code=201)
def create_agenda_invite(
    invite: AgendaInviteCreate,
    db: Session = Depends(get_db),
    aggregator: SourceAggregator = Depends(get_aggregator),
) -> AgendaInviteModel:
    """Create a new agenda invite."""
    require_user(db, invite.user_id)
    source_ids = authorize_sources(aggregator, invite.user_id, invite.agenda_source_ids)

    db_invite = AgendaInviteModel(
        **invite.model_dump(exclude={"agenda_source_ids"}),
        agenda_sources=_load_sources(db, source_ids),
    )
    db.add(db_invite)
    db.commit()
    db.refresh(db_invite)
    logger.info(f"Created agenda invite {db_invite.resource_id} for user {invite.user_id}")
    return db_invite


@router.get("/", response_model=Page[AgendaInvite])
def list_agenda_invites(
    user_id: int = Query(..., description="Owner of the agenda invites"),
    page: int = Query(1, ge=1, description="The page number to retrieve (1-based)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    db: Session = Depends(get_db),
) -> Page[AgendaInvite]:
    """List a user's agenda invites, most recently created first."""
    query = db.query(AgendaInviteModel).filter(AgendaInviteModel.user_id == user_id)
    total = query.count()
    invites = (
        query.order_by(AgendaInviteModel.created_at.desc(), AgendaInviteModel.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return Page[AgendaInvite](
        data=[AgendaInvite.model_validate(invite) for invite in invites],
        pagination=Pagination.build(page, page_size, total),
    )


@router.get("/{resource_id}", response_model=AgendaInvite)
def get_agenda_invite(
    resource_id: UUID,
    user_id: int = Query(..., description="Owner of the agenda invite"),
    db: Session = Depends(get_db),
) -> AgendaInviteModel:
    """Get an agenda invite by resource ID."""
    return _get_owned_invite(db, resource_id, user_id)


@router.put("/{resource_id}", response_model=AgendaInvite)
def update_agenda_invite(
    resource_id: UUID,
    invite_update: AgendaInviteUpdate,
    user_id: int = Query(..., description="Owner of the agenda invite"),
    db: Session = Depends(get_db),
    aggregator: SourceAggregator = Depends(get_aggregator),
) -> AgendaInviteModel:
    """Update an agenda invite's window, padding, slot sizes or linked sources."""
    invite = _get_owned_invite(db, resource_id, user_id, for_update=True)

    update_data = invite_update.model_dump(exclude_unset=True)
    source_ids = update_data.pop("agenda_source_ids", None)

    not_before = update_data.get("not_before", invite.not_before)
    not_after = update_data.get("not_after", invite.not_after)
    if not_before > not_after:
        raise HTTPException(status_code=422, detail="not_before must not be after not_after")

    if source_ids is not None:
        invite.agenda_sources = _load_sources(
            db, authorize_sources(aggregator, user_id, source_ids)
        )

    for field, value in update_data.items():
        setattr(invite, field, value)

    db.commit()
    db.refresh(invite)
    return invite


@router.delete("/{resource_id}", status_code=204)
def delete_agenda_invite(
    resource_id: UUID,
    user_id: int = Query(..., description="Owner of the agenda invite"),
    db: Session = Depends(get_db),
) -> None:
    """Delete an agenda invite."""
    invite = _get_owned_invite(db, resource_id, user_id)

    db.delete(invite)
    db.commit()
    logger.info(f"Deleted agenda invite {resource_id}")
