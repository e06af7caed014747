"""Errors raised by the availability engine.

The API layer translates these into HTTP responses; the engine itself never
retries or swallows them.
"""


class AgendaError(Exception):
    """Base class for availability engine errors."""


class ValidationError(AgendaError):
    """Malformed engine input: bad padding, slot sizes or window."""


class AuthorizationError(AgendaError):
    """A referenced resource is not owned by the requesting user."""


class NotFoundError(AgendaError):
    """A referenced resource does not exist."""


class ExpiredError(AgendaError):
    """A resource is past its expiry time."""


class InviteNotFoundError(NotFoundError):
    """The agenda invite does not exist."""


class InviteExpiredError(ExpiredError):
    """The agenda invite is past its ``expires_at`` cutoff."""
