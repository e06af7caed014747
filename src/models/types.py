"""Column types shared by the ORM models."""

from datetime import timedelta

from sqlalchemy import JSON, BigInteger, DateTime
from sqlalchemy.types import TypeDecorator

from src.schemas.durations import format_duration, parse_duration
from src.services.intervals import as_utc


class UTCDateTime(TypeDecorator):
    """Timestamp stored in UTC and always loaded as an aware datetime."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        value = as_utc(value)
        if dialect.name == "sqlite":
            # SQLite has no timezone support, store naive UTC
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return as_utc(value)


class DurationType(TypeDecorator):
    """Custom type for timedelta storage as integer microseconds."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return value // timedelta(microseconds=1)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return timedelta(microseconds=value)
        return value


class DurationListType(TypeDecorator):
    """Ordered list of timedeltas stored as a JSON array of duration strings."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return [format_duration(duration) for duration in value]
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return [parse_duration(duration) for duration in value]
        return value
