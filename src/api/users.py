"""User API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import require_user
from src.database import get_db
from src.models.user import User as UserModel
from src.schemas.user import User, UserRegister, UserUpdate
from src.services.passwords import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["users"])


def _ensure_email_available(db: Session, email: str) -> None:
    if db.query(UserModel).filter(UserModel.email == email).first():
        raise HTTPException(status_code=409, detail="Email already registered")


def _commit_user(db: Session) -> None:
    """Commit, reporting a lost race on the unique email index as a conflict."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered") from e


@router.post("/register", response_model=User, status_code=201)
def register_user(user: UserRegister, db: Session = Depends(get_db)) -> UserModel:
    """Register a new user by email and password."""
    email = user.email.lower()
    _ensure_email_available(db, email)

    db_user = UserModel(email=email, password_hash=hash_password(user.password))
    db.add(db_user)
    _commit_user(db)
    db.refresh(db_user)
    logger.info(f"Registered user {db_user.id}")
    return db_user


@router.get("/users/{user_id}", response_model=User)
def get_user(user_id: int, db: Session = Depends(get_db)) -> UserModel:
    """Get a user by ID."""
    return require_user(db, user_id)


@router.put("/users/{user_id}", response_model=User)
def update_user(user_id: int, user_update: UserUpdate, db: Session = Depends(get_db)) -> UserModel:
    """Update a user's email or password."""
    user = require_user(db, user_id)

    if user_update.email is not None:
        email = user_update.email.lower()
        if email != user.email:
            _ensure_email_available(db, email)
            user.email = email
    if user_update.password is not None:
        user.password_hash = hash_password(user_update.password)

    _commit_user(db)
    db.refresh(user)
    return user


@router.delete("/users/{user_id}", status_code=204)
def delete_user(user_id: int, db: Session = Depends(get_db)) -> None:
    """Delete a user with all their agenda sources, items and invites."""
    user = require_user(db, user_id)

    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")
