"""
Services package - Business logic layer.

This package contains all business logic services that operate on Django models
but are decoupled from the HTTP layer.

Modules:
    - matching: Ride-to-chair matching engine
    - ride_management: Ride creation and status history
"""

from .matching import (
    MatchingEngine,
    MatchResult,
    run_matching_cycle,
    RepositoryError,
)
from .ride_management import (
    create_ride,
    advance_ride_status,
    get_latest_status,
    is_ride_completed,
    RideNotFoundError,
    ActiveRideExistsError,
    InvalidStatusTransitionError,
    RideNotAssignedError,
)

__all__ = [
    # Matching
    "MatchingEngine",
    "MatchResult",
    "run_matching_cycle",
    "RepositoryError",
    # Ride management
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
