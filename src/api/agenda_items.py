"""Agenda item API endpoints for ingesting busy time."""

import logging
from collections import defaultdict
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.api.dependencies import authorize_sources, get_aggregator
from src.database import get_db
from src.models.agenda_item import AgendaItem as AgendaItemModel
from src.schemas.agenda_item import AgendaItem, AgendaItemUpsert
from src.schemas.common import Page, Pagination, UTCDatetime
from src.services.aggregator import SourceAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/agenda-items", tags=["agenda-items"])


def _get_owned_item(db: Session, resource_id: UUID, user_id: int) -> AgendaItemModel:
    item = (
        db.query(AgendaItemModel)
        .filter(
            AgendaItemModel.resource_id == resource_id,
            AgendaItemModel.user_id == user_id,
        )
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail="Agenda item not found")
    return item


@router.post("/", response_model=list[AgendaItem])
def upsert_agenda_items(
    items: list[AgendaItemUpsert],
    db: Session = Depends(get_db),
    aggregator: SourceAggregator = Depends(get_aggregator),
) -> list[AgendaItemModel]:
    """Create agenda items, replacing existing ones that share a resource_id."""
    sources_by_user: dict[int, set[int]] = defaultdict(set)
    for item in items:
        sources_by_user[item.user_id].add(item.agenda_source_id)
    for user_id, source_ids in sources_by_user.items():
        authorize_sources(aggregator, user_id, sorted(source_ids))

    resource_ids = [item.resource_id for item in items if item.resource_id is not None]
    existing: dict[UUID, AgendaItemModel] = {}
    if resource_ids:
        rows = (
            db.query(AgendaItemModel)
            .filter(AgendaItemModel.resource_id.in_(resource_ids))
            .with_for_update()
            .all()
        )
        existing = {row.resource_id: row for row in rows}

    for item in items:
        db_item = existing.get(item.resource_id)
        if db_item is not None and db_item.user_id != item.user_id:
            raise HTTPException(status_code=403, detail="Agenda item belongs to another user")

    saved = []
    created = 0
    for item in items:
        db_item = existing.get(item.resource_id) if item.resource_id else None
        if db_item is None:
            db_item = AgendaItemModel()
            if item.resource_id:
                db_item.resource_id = item.resource_id
                existing[item.resource_id] = db_item
            db.add(db_item)
            created += 1

        db_item.user_id = item.user_id
        db_item.agenda_source_id = item.agenda_source_id
        db_item.start_time = item.start_time
        db_item.end_time = item.end_time
        db_item.description = item.description
        saved.append(db_item)

    db.commit()
    for db_item in saved:
        db.refresh(db_item)

    logger.info(f"Ingested {len(saved)} agenda items ({created} new)")
    return saved


@router.get("/", response_model=Page[AgendaItem])
def list_agenda_items(
    user_id: int = Query(..., description="Owner of the agenda items"),
    agenda_source_id: int | None = Query(None, description="Only items from this source"),
    start_time: UTCDatetime | None = Query(None, description="Only items ending after this time"),
    end_time: UTCDatetime | None = Query(None, description="Only items starting before this time"),
    page: int = Query(1, ge=1, description="The page number to retrieve (1-based)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    db: Session = Depends(get_db),
) -> Page[AgendaItem]:
    """Query a user's agenda items, optionally restricted to a source and time range."""
    query = db.query(AgendaItemModel).filter(AgendaItemModel.user_id == user_id)

    if agenda_source_id is not None:
        query = query.filter(AgendaItemModel.agenda_source_id == agenda_source_id)
    if start_time is not None:
        query = query.filter(AgendaItemModel.end_time > start_time)
    if end_time is not None:
        query = query.filter(AgendaItemModel.start_time < end_time)

    total = query.count()
    items = (
        query.order_by(AgendaItemModel.start_time.asc(), AgendaItemModel.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return Page[AgendaItem](
        data=[AgendaItem.model_validate(item) for item in items],
        pagination=Pagination.build(page, page_size, total),
    )


@router.get("/{resource_id}", response_model=AgendaItem)
def get_agenda_item(
    resource_id: UUID,
    user_id: int = Query(..., description="Owner of the agenda item"),
    db: Session = Depends(get_db),
) -> AgendaItemModel:
    """Get an agenda item by resource ID."""
    return _get_owned_item(db, resource_id, user_id)


@router.delete("/{resource_id}", status_code=204)
def delete_agenda_item(
    resource_id: UUID,
    user_id: int = Query(..., description="Owner of the agenda item"),
    db: Session = Depends(get_db),
) -> None:
    """Delete an agenda item."""
    item = _get_owned_item(db, resource_id, user_id)

    db.delete(item)
    db.commit()
