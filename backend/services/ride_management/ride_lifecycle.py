"""
Core ride lifecycle operations.

Rides are created unassigned with a MATCHING status. The matching engine
sets the chair; everything after that is recorded here as an append-only
status history. A chair becomes dispatchable again once its ride reaches
COMPLETED.
"""

import logging
from typing import Optional
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F

from rides.models import Ride, RideStatus
from .exceptions import (
    RideNotFoundError,
    ActiveRideExistsError,
    InvalidStatusTransitionError,
    RideNotAssignedError,
)

logger = logging.getLogger(__name__)

STATUS_ORDER = [value for value, _ in RideStatus.STATUS_CHOICES]


@dataclass
class RideResult:
    """Result object for ride operations."""
    success: bool
    ride: Optional[Ride] = None
    status: Optional[str] = None
    message: str = ""


# ===================== Queries =====================

def get_latest_status(ride: Ride) -> Optional[str]:
    """Return the most recently recorded status of a ride, or None."""
    latest = ride.statuses.order_by("-created_at", "-id").first()
    return latest.status if latest else None


def is_ride_completed(ride: Ride) -> bool:
    """A ride is complete once its COMPLETED status has been recorded."""
    return ride.statuses.filter(status=RideStatus.COMPLETED).exists()


def check_active_ride(user) -> Optional[Ride]:
    """Check if user has a ride that has not completed yet."""
    return (
        Ride.objects.filter(user=user)
        .exclude(statuses__status=RideStatus.COMPLETED)
        .first()
    )


# ===================== Rider Operations =====================

@transaction.atomic
def create_ride(
    user,
    pickup_latitude: float,
    pickup_longitude: float,
    destination_latitude: float,
    destination_longitude: float,
) -> RideResult:
    """
    Create a new, unassigned ride waiting for the matching engine.

    Args:
        user: User model instance (rider)
        pickup_latitude: Pickup location latitude
        pickup_longitude: Pickup location longitude
        destination_latitude: Destination latitude
        destination_longitude: Destination longitude

    Returns:
        RideResult with the created ride

    Raises:
        ActiveRideExistsError: If the rider already has an unfinished ride
    """
    if check_active_ride(user):
        raise ActiveRideExistsError("You already have an active ride request")

    ride = Ride.objects.create(
        user=user,
        pickup_latitude=pickup_latitude,
        pickup_longitude=pickup_longitude,
        destination_latitude=destination_latitude,
        destination_longitude=destination_longitude,
    )
    RideStatus.objects.create(ride=ride, status=RideStatus.MATCHING)

    logger.info("Created ride %s for user %s", ride.id, user.pk)

    return RideResult(
        success=True,
        ride=ride,
        status=RideStatus.MATCHING,
        message="Searching for a nearby chair...",
    )


# ===================== Chair Operations =====================

@transaction.atomic
def advance_ride_status(ride_id: int, status: str) -> RideResult:
    """
    Append the next status to a ride's history.

    Statuses must follow STATUS_ORDER one step at a time. Anything past
    MATCHING requires the ride to have been assigned a chair.

    Args:
        ride_id: ID of the ride
        status: Status to record

    Returns:
        RideResult with the recorded status

    Raises:
        RideNotFoundError: If the ride does not exist
        InvalidStatusTransitionError: If ``status`` is not the next step
        RideNotAssignedError: If the ride has no chair yet
    """
    try:
        ride = Ride.objects.select_for_update().get(id=ride_id)
    except Ride.DoesNotExist:
        raise RideNotFoundError("Ride not found")

    if status not in STATUS_ORDER:
        raise InvalidStatusTransitionError(f"Unknown ride status {status!r}")

    current = get_latest_status(ride)
    expected = STATUS_ORDER[0] if current is None else _next_status(current)
    if status != expected:
        raise InvalidStatusTransitionError(
            f"Cannot move ride {ride.id} from {current} to {status}"
        )

    if status != RideStatus.MATCHING and ride.chair_id is None:
        raise RideNotAssignedError("Ride has not been assigned a chair yet")

    RideStatus.objects.create(ride=ride, status=status)

    if status == RideStatus.COMPLETED:
        get_user_model().objects.filter(pk=ride.user_id).update(
            completed_rides=F("completed_rides") + 1
        )
        logger.info("Ride %s completed; chair %s is free again", ride.id, ride.chair_id)

    return RideResult(success=True, ride=ride, status=status)


# ===================== Helper Functions =====================

def _next_status(current: str) -> Optional[str]:
    index = STATUS_ORDER.index(current)
    if index + 1 >= len(STATUS_ORDER):
        return None
    return STATUS_ORDER[index + 1]
