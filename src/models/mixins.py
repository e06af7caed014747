"""Reusable model mixins."""

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from src.models.types import UTCDateTime
from src.services.intervals import utcnow


class TimestampMixin:
    """Adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )
