"""
Ride management service - ride creation and status history.

This module handles:
    - Creating ride requests
    - Appending status transitions (MATCHING -> ... -> COMPLETED)
    - Querying ride progress
"""

from .ride_lifecycle import (
    RideResult,
    STATUS_ORDER,
    create_ride,
    advance_ride_status,
    get_latest_status,
    is_ride_completed,
)

from .exceptions import (
    RideNotFoundError,
    ActiveRideExistsError,
    InvalidStatusTransitionError,
    RideNotAssignedError,
)

__all__ = [
    # Lifecycle operations
    "RideResult",
    "STATUS_ORDER",
    "create_ride",
    "advance_ride_status",
    "get_latest_status",
    "is_ride_completed",
    # Exceptions
    "RideNotFoundError",
    "ActiveRideExistsError",
    "InvalidStatusTransitionError",
    "RideNotAssignedError",
]
