"""Merges busy time from a user's agenda sources into one timeline."""

import logging
from collections.abc import Collection, Iterable, Iterator

from src.services.errors import AuthorizationError, NotFoundError
from src.services.intervals import BusyInterval
from src.services.repository import AgendaRepository

logger = logging.getLogger(__name__)


class BusyTimeline:
    """Busy intervals of a set of sources, ordered by (start, end).

    Every iteration reads the repository again, so the timeline can be
    consumed more than once. Intervals are deduplicated by id.
    """

    def __init__(self, repository: AgendaRepository, user_id: int, source_ids: tuple[int, ...]):
        self._repository = repository
        self.user_id = user_id
        self.source_ids = source_ids

    def __iter__(self) -> Iterator[BusyInterval]:
        intervals = self._repository.load_busy_intervals(self.user_id, self.source_ids)
        seen: set[int] = set()
        for interval in sorted(intervals, key=lambda i: (i.start, i.end, i.id)):
            if interval.id in seen:
                continue
            seen.add(interval.id)
            yield interval


class SourceAggregator:
    """Service for collecting busy time across agenda sources."""

    def __init__(self, repository: AgendaRepository):
        self.repository = repository

    def authorize(self, user_id: int, source_ids: Iterable[int]) -> tuple[int, ...]:
        """Check that every source exists and belongs to ``user_id``.

        Returns:
            The distinct source ids, in the order given

        Raises:
            NotFoundError: If a source does not exist.
            AuthorizationError: If a source belongs to another user.
        """
        ids = tuple(dict.fromkeys(source_ids))
        owners = self.repository.source_owners(ids)

        missing = [source_id for source_id in ids if source_id not in owners]
        if missing:
            raise NotFoundError(f"Agenda sources not found: {missing}")

        foreign = [source_id for source_id in ids if owners[source_id] != user_id]
        if foreign:
            logger.warning(f"User {user_id} referenced agenda sources it does not own: {foreign}")
            raise AuthorizationError(f"Agenda sources not owned by user {user_id}: {foreign}")

        return ids

    def busy_intervals(self, user_id: int, source_ids: Collection[int]) -> BusyTimeline:
        """Return the merged busy timeline of the user's sources."""
        return BusyTimeline(self.repository, user_id, self.authorize(user_id, source_ids))
