"""Agenda source API endpoints."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import require_user
from src.database import get_db
from src.models.agenda_source import AgendaSource as AgendaSourceModel
from src.schemas.agenda_source import AgendaSource, AgendaSourceCreate, AgendaSourceUpdate
from src.schemas.common import Page, Pagination

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/agenda-sources", tags=["agenda-sources"])


def _get_owned_source(
    db: Session, source_id: int, user_id: int, for_update: bool = False
) -> AgendaSourceModel:
    """Load a source owned by ``user_id``; other users' sources look missing."""
    query = db.query(AgendaSourceModel).filter(
        AgendaSourceModel.id == source_id,
        AgendaSourceModel.user_id == user_id,
    )
    if for_update:
        query = query.with_for_update()
    source = query.first()
    if not source:
        raise HTTPException(status_code=404, detail="Agenda source not found")
    return source


@router.get("/", response_model=Page[AgendaSource])
def list_agenda_sources(
    user_id: int = Query(..., description="Owner of the agenda sources"),
    page: int = Query(1, ge=1, description="The page number to retrieve (1-based)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    order_by: Literal["asc", "desc"] = Query("asc", description="Order by updated_at"),
    db: Session = Depends(get_db),
) -> Page[AgendaSource]:
    """List a user's agenda sources, paginated and ordered by last update."""
    query = db.query(AgendaSourceModel).filter(AgendaSourceModel.user_id == user_id)
    total = query.count()

    if order_by == "desc":
        query = query.order_by(AgendaSourceModel.updated_at.desc(), AgendaSourceModel.id.desc())
    else:
        query = query.order_by(AgendaSourceModel.updated_at.asc(), AgendaSourceModel.id.asc())

    sources = query.offset((page - 1) * page_size).limit(page_size).all()
    return Page[AgendaSource](
        data=[AgendaSource.model_validate(source) for source in sources],
        pagination=Pagination.build(page, page_size, total),
    )


@router.post("/", response_model=AgendaSource, status_code=201)
def create_agenda_source(
    source: AgendaSourceCreate, db: Session = Depends(get_db)
) -> AgendaSourceModel:
    """Register a new agenda source."""
    require_user(db, source.user_id)

    db_source = AgendaSourceModel(
        user_id=source.user_id,
        url=str(source.url),
        type=source.type.value,
    )
    db.add(db_source)
    db.commit()
    db.refresh(db_source)
    logger.info(f"Created agenda source {db_source.id} for user {source.user_id}")
    return db_source


@router.get("/{source_id}", response_model=AgendaSource)
def get_agenda_source(
    source_id: int,
    user_id: int = Query(..., description="Owner of the agenda source"),
    db: Session = Depends(get_db),
) -> AgendaSourceModel:
    """Get an agenda source by ID."""
    return _get_owned_source(db, source_id, user_id)


@router.put("/{source_id}", response_model=AgendaSource)
def update_agenda_source(
    source_id: int,
    source_update: AgendaSourceUpdate,
    user_id: int = Query(..., description="Owner of the agenda source"),
    db: Session = Depends(get_db),
) -> AgendaSourceModel:
    """Update an agenda source's url or type."""
    source = _get_owned_source(db, source_id, user_id, for_update=True)

    if source_update.url is not None:
        source.url = str(source_update.url)
    if source_update.type is not None:
        source.type = source_update.type.value

    db.commit()
    db.refresh(source)
    return source


@router.delete("/{source_id}", status_code=204)
def delete_agenda_source(
    source_id: int,
    user_id: int = Query(..., description="Owner of the agenda source"),
    db: Session = Depends(get_db),
) -> None:
    """Delete an agenda source and all of its agenda items."""
    source = _get_owned_source(db, source_id, user_id)

    db.delete(source)
    db.commit()
    logger.info(f"Deleted agenda source {source_id}")
