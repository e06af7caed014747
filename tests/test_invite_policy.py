"""Tests for the invite policy guard."""

import uuid
from dataclasses import fields
from datetime import datetime, timedelta, timezone

import pytest

from src.services.errors import (
    AuthorizationError,
    ExpiredError,
    InviteExpiredError,
    InviteNotFoundError,
    NotFoundError,
)
from src.services.invite_policy import (
    AgendaItemView,
    InvitePolicyGuard,
    InviteState,
    effective_window,
    invite_state,
)
from src.services.intervals import Interval

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2030, 1, 7, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def repository(memory_repository):
    memory_repository.add_source(10, owner_user_id=1)
    memory_repository.add_source(20, owner_user_id=2)
    return memory_repository


@pytest.fixture
def guard(repository):
    return InvitePolicyGuard(repository, view_description="Free")


class TestInviteState:
    """Tests for the active/expired state function."""

    def test_active_before_expiry(self, repository):
        invite = repository.add_invite(expires_at=NOW + timedelta(seconds=1))
        assert invite_state(invite, NOW) is InviteState.ACTIVE

    def test_expired_at_expiry(self, repository):
        invite = repository.add_invite(expires_at=NOW)
        assert invite_state(invite, NOW) is InviteState.EXPIRED


class TestEffectiveWindow:
    """Tests for clipping the requested range to invite bounds."""

    def test_defaults_to_invite_bounds(self, repository):
        invite = repository.add_invite()
        assert effective_window(invite, None, None) == Interval(at(9), at(17))

    def test_clipped_to_invite_bounds(self, repository):
        invite = repository.add_invite()
        window = effective_window(invite, at(8), at(12))
        assert window == Interval(at(9), at(12))

    def test_inverted_request_is_empty(self, repository):
        invite = repository.add_invite()
        assert effective_window(invite, at(12), at(11)) is None

    def test_request_outside_bounds_is_empty(self, repository):
        invite = repository.add_invite()
        assert effective_window(invite, at(17), at(18)) is None


class TestViewInvite:
    """Tests for resolving an invite into viewer-safe slots."""

    def test_missing_invite(self, guard):
        with pytest.raises(InviteNotFoundError):
            guard.view_invite(uuid.uuid4(), None, None, NOW)

    def test_expiry_boundary(self, guard, repository):
        invite = repository.add_invite(expires_at=NOW)

        with pytest.raises(InviteExpiredError):
            guard.view_invite(invite.id, None, None, now=NOW)

        views = guard.view_invite(invite.id, None, None, now=NOW - timedelta(microseconds=1))
        assert len(views) == 1

    def test_error_taxonomy(self):
        assert issubclass(InviteNotFoundError, NotFoundError)
        assert issubclass(InviteExpiredError, ExpiredError)
        assert not issubclass(InviteExpiredError, NotFoundError)

    def test_resolves_busy_time_of_linked_sources(self, guard, repository):
        repository.add_busy(1, 1, 10, at(10), at(11))
        invite = repository.add_invite(
            source_ids=(10,),
            padding_before=timedelta(minutes=15),
            padding_after=timedelta(minutes=15),
        )

        views = guard.view_invite(invite.id, None, None, NOW)

        assert views == [AgendaItemView(at(11, 15), at(12, 15), "Free")]

    def test_unlinked_sources_ignored(self, guard, repository):
        repository.add_source(11, owner_user_id=1)
        repository.add_busy(1, 1, 11, at(9), at(17))
        invite = repository.add_invite(source_ids=(10,))

        views = guard.view_invite(invite.id, None, None, NOW)

        assert [(v.start, v.end) for v in views] == [(at(9), at(10))]

    def test_requested_range_clipped(self, guard, repository):
        invite = repository.add_invite()

        views = guard.view_invite(invite.id, at(7), at(14, 30), NOW)

        assert [(v.start, v.end) for v in views] == [(at(9), at(10))]

    def test_inverted_request_returns_empty(self, guard, repository):
        invite = repository.add_invite()
        assert guard.view_invite(invite.id, at(15), at(10), NOW) == []

    def test_degenerate_invite_window_returns_empty(self, guard, repository):
        invite = repository.add_invite(not_before=at(9), not_after=at(9))
        assert guard.view_invite(invite.id, None, None, NOW) == []

    def test_foreign_linked_source_fails(self, guard, repository):
        invite = repository.add_invite(source_ids=(20,))
        with pytest.raises(AuthorizationError):
            guard.view_invite(invite.id, None, None, NOW)

    def test_views_carry_only_start_end_and_placeholder(self, guard, repository):
        repository.add_busy(1, 1, 10, at(9), at(10))
        invite = repository.add_invite(source_ids=(10,))

        views = guard.view_invite(invite.id, None, None, NOW)

        assert {f.name for f in fields(AgendaItemView)} == {"start", "end", "description"}
        assert all(view.description == "Free" for view in views)
