"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from src.config import get_settings

settings = get_settings()

app = Celery(
    "agenda_share",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.invite_tasks"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Result expiration
    result_expires=3600,  # 1 hour
    # Beat schedule for periodic tasks
    beat_schedule={
        "purge-expired-invites-daily": {
            "task": "src.tasks.invite_tasks.purge_expired_invites",
            "schedule": crontab(hour=3, minute=0),
        },
    },
)
