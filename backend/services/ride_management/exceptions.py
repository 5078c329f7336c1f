"""Custom exceptions for ride management."""


class RideNotFoundError(Exception):
    """Raised when a ride cannot be found."""
    pass


class ActiveRideExistsError(Exception):
    """Raised when user already has an active ride."""
    pass


class InvalidStatusTransitionError(Exception):
    """Raised when a status is appended out of order."""
    pass


class RideNotAssignedError(Exception):
    """Raised when a ride needs a chair for the operation but has none yet."""
    pass
