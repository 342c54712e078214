"""
Domain exceptions.

Raised by the persistence layer and translated to HTTP responses by
:class:`app.services.tracker_service.TrackerService`.
"""


class TrackerError(Exception):
    """Base class for all tracker errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(TrackerError):
    """A required field is missing or malformed."""


class InvalidSession(InvalidInput):
    """Session date, duration or RPE is missing, non-positive or out of range."""


class DuplicatePlayer(TrackerError):
    """A player with the same name (case-insensitive) already exists."""


class NotFound(TrackerError):
    """No player with the given id."""


class StoreUnavailable(TrackerError):
    """The backing store could not be read or written."""
