"""Shared dependencies for API endpoints."""

from collections.abc import Iterable

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from src.config import get_app_config
from src.database import get_db
from src.models.user import User as UserModel
from src.services.aggregator import SourceAggregator
from src.services.errors import AuthorizationError, NotFoundError
from src.services.invite_policy import InvitePolicyGuard
from src.services.repository import SqlAlchemyAgendaRepository


def get_repository(db: Session = Depends(get_db)) -> SqlAlchemyAgendaRepository:
    """Repository bound to the request's session."""
    return SqlAlchemyAgendaRepository(db)


def get_aggregator(
    repository: SqlAlchemyAgendaRepository = Depends(get_repository),
) -> SourceAggregator:
    return SourceAggregator(repository)


def get_invite_guard(
    repository: SqlAlchemyAgendaRepository = Depends(get_repository),
) -> InvitePolicyGuard:
    return InvitePolicyGuard(
        repository,
        view_description=get_app_config().invites["view_description"],
    )


def require_user(db: Session, user_id: int) -> UserModel:
    """Load a user or fail with 404."""
    user = db.query(UserModel).filter(UserModel.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def authorize_sources(
    aggregator: SourceAggregator, user_id: int, source_ids: Iterable[int]
) -> tuple[int, ...]:
    """Check source ownership, translating engine errors into HTTP errors."""
    try:
        return aggregator.authorize(user_id, source_ids)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
