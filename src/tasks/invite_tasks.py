"""Agenda invite maintenance tasks."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from src.celery_app import app
from src.config import get_app_config
from src.database import SessionLocal
from src.models.agenda_invite import AgendaInvite
from src.services.intervals import utcnow

logger = logging.getLogger(__name__)


def delete_invites_expired_before(db: Session, cutoff: datetime) -> int:
    """Delete invites whose expiry lies before ``cutoff``.

    Returns:
        Number of invites deleted
    """
    invites = db.query(AgendaInvite).filter(AgendaInvite.expires_at < cutoff).all()
    for invite in invites:
        db.delete(invite)
    db.commit()
    return len(invites)


@app.task
def purge_expired_invites() -> dict:
    """Remove invites that have been expired for longer than the retention period.

    Expiry itself is enforced when an invite is viewed; this task only
    reclaims storage.
    """
    retention_days = get_app_config().invites["expired_retention_days"]
    cutoff = utcnow() - timedelta(days=retention_days)

    db = SessionLocal()
    try:
        deleted = delete_invites_expired_before(db, cutoff)
        logger.info(f"Purged {deleted} agenda invites expired before {cutoff.isoformat()}")
        return {"deleted": deleted}
    finally:
        db.close()
