"""Celery tasks for agenda-share."""

from src.tasks.invite_tasks import purge_expired_invites

__all__ = [
    "purge_expired_invites",
]
