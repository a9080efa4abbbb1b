"""Error kinds raised by the film catalog core.

Each kind carries Protean's ``{field: [messages]}`` payload. The HTTP boundary
maps the kind to a status code; the core never deals in status codes.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class NotFoundError(ObjectNotFoundError):
    """A referenced user, movie, review, watchlist, flag or watched record does not exist."""

    def __init__(self, messages):
        super().__init__(messages)
        self.messages = messages


class ConflictError(ValidationError):
    """The operation would duplicate something that must be unique."""


class AlreadyWatchedError(ConflictError):
    """A watched record already exists for the (user, movie) pair."""


class PreconditionFailedError(ValidationError):
    """A required prior state is missing."""


class ForbiddenError(ValidationError):
    """The caller is neither the owner of the resource nor allowed to act on it."""


class InvalidStateError(ValidationError):
    """The requested transition is not valid from the current state."""


def not_found(kind: str, identifier) -> NotFoundError:
    return NotFoundError({kind: [f"{kind.capitalize()} `{identifier}` does not exist"]})
