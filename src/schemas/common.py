"""Shared schema types: UTC timestamps and pagination."""

import math
from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel

from src.services.intervals import as_utc

T = TypeVar("T")


def _to_utc(value: datetime) -> datetime:
    try:
        return as_utc(value)
    except OverflowError as e:
        raise ValueError("timestamp out of range") from e


# Naive timestamps are taken to be UTC
UTCDatetime = Annotated[datetime, AfterValidator(_to_utc)]


class Pagination(BaseModel):
    """Pagination information for a list response."""

    page: int
    page_size: int
    total_items: int
    total_pages: int

    @classmethod
    def build(cls, page: int, page_size: int, total_items: int) -> "Pagination":
        return cls(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=math.ceil(total_items / page_size),
        )


class Page(BaseModel, Generic[T]):
    """A page of results."""

    data: list[T]
    pagination: Pagination
