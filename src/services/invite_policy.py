"""Invite policy guard.

The guard is the privacy boundary between a user's calendars and the third
party holding an agenda invite. Only the start and end of each free slot
cross it; owner, source and event details never do.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from src.services.aggregator import SourceAggregator
from src.services.availability import resolve
from src.services.errors import InviteExpiredError, InviteNotFoundError
from src.services.intervals import Interval
from src.services.repository import AgendaRepository, InviteRecord

logger = logging.getLogger(__name__)

DEFAULT_VIEW_DESCRIPTION = "Available"


class InviteState(str, Enum):
    """Lifecycle state of an agenda invite."""

    ACTIVE = "active"
    EXPIRED = "expired"


def invite_state(invite: InviteRecord, now: datetime) -> InviteState:
    """Evaluate whether an invite can still be resolved at ``now``."""
    if now >= invite.expires_at:
        return InviteState.EXPIRED
    return InviteState.ACTIVE


def effective_window(
    invite: InviteRecord,
    requested_from: datetime | None,
    requested_to: datetime | None,
) -> Interval | None:
    """Clip the requested range to the invite bounds.

    A missing bound defaults to the invite's own. Returns None when the
    clipped range is empty or inverted.
    """
    start = invite.not_before if requested_from is None else max(requested_from, invite.not_before)
    end = invite.not_after if requested_to is None else min(requested_to, invite.not_after)
    if start >= end:
        return None
    return Interval(start, end)


@dataclass(frozen=True)
class AgendaItemView:
    """Privacy-stripped slot handed to invite viewers."""

    start: datetime
    end: datetime
    description: str


class InvitePolicyGuard:
    """Resolves agenda invites into viewer-safe availability."""

    def __init__(
        self,
        repository: AgendaRepository,
        aggregator: SourceAggregator | None = None,
        view_description: str = DEFAULT_VIEW_DESCRIPTION,
    ):
        self.repository = repository
        self.aggregator = aggregator or SourceAggregator(repository)
        self.view_description = view_description

    def view_invite(
        self,
        invite_id: uuid.UUID,
        requested_from: datetime | None,
        requested_to: datetime | None,
        now: datetime,
    ) -> list[AgendaItemView]:
        """Compute the free slots an invite holder may see.

        Args:
            invite_id: Public identifier of the invite
            requested_from: Start of the range the viewer asked for, if any
            requested_to: End of the range the viewer asked for, if any
            now: Current instant, used for the expiry check

        Returns:
            Views ordered by start, then by size. Empty when the requested
            range does not intersect the invite bounds.

        Raises:
            InviteNotFoundError: If no invite has this id.
            InviteExpiredError: If ``now`` is at or past ``expires_at``.
        """
        invite = self.repository.load_invite(invite_id)
        if invite is None:
            logger.info(f"Refused view of agenda invite {invite_id}: not found")
            raise InviteNotFoundError(f"Agenda invite {invite_id} not found")

        if invite_state(invite, now) is InviteState.EXPIRED:
            logger.info(f"Refused view of agenda invite {invite_id}: expired at {invite.expires_at}")
            raise InviteExpiredError(f"Agenda invite {invite_id} expired")

        window = effective_window(invite, requested_from, requested_to)
        if window is None:
            return []

        busy = self.aggregator.busy_intervals(invite.owner_user_id, invite.source_ids)
        slots = resolve(
            busy,
            window,
            invite.padding_before,
            invite.padding_after,
            invite.slot_sizes,
        )
        return [AgendaItemView(slot.start, slot.end, self.view_description) for slot in slots]
