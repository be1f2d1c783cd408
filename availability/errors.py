"""
Exceptions for the availability engine.
Raised by the service boundary; callers map them to request / upstream errors.
"""


class AvailabilityError(Exception):
    """Base exception for all availability engine errors."""
    pass


class InvalidRequestError(AvailabilityError, ValueError):
    """Raised when a request or a collaborator record fails validation."""
    pass


class DataFetchError(AvailabilityError):
    """
    Raised when a collaborator read fails.
    The computation is aborted: a failed read is never treated as 'no constraint'.
    """

    def __init__(self, resource: str, venue_id: str, message: str = ""):
        self.resource = resource
        self.venue_id = venue_id
        super().__init__(message or f"Failed to fetch {resource} for venue {venue_id}")
