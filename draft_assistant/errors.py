"""Exception types raised by the draft engine."""


class DraftError(Exception):
    """Base class for every error raised by the draft assistant."""


class ValidationError(DraftError, ValueError):
    """Malformed league configuration or player catalog input."""


class NotFoundError(DraftError, LookupError):
    """Unknown player or team identifier."""


class AlreadyDraftedError(DraftError):
    """Player has already been drafted."""


class ConflictError(DraftError):
    """Caller's expected round/pick does not match the team on the clock."""


class InvalidStateError(DraftError):
    """Operation is not allowed in the draft's current state."""
