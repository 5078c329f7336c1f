"""
Ride and chair queries consumed by the matching engine.

All reads are side-effect free. The only write is ``try_assign_chair``, a
conditional update that succeeds for at most one writer per ride.
"""

import logging
from dataclasses import dataclass
from typing import List

from django.db import DatabaseError, transaction
from django.db.models import Exists, OuterRef, Subquery
from django.utils import timezone

from chairs.models import Chair, ChairLocation
from rides.models import Ride, RideStatus
from .exceptions import AssignmentConflict, RepositoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChairCandidate:
    """An eligible chair and its most recent known position."""
    chair_id: int
    latitude: float
    longitude: float


def incomplete_rides():
    """Rides that have no COMPLETED status recorded yet."""
    completed = RideStatus.objects.filter(ride=OuterRef("pk"), status=RideStatus.COMPLETED)
    return Ride.objects.filter(~Exists(completed))


class RideChairRepository:
    """Django ORM backed access to rides, chairs and chair locations."""

    def unmatched_rides(self) -> List[Ride]:
        """All rides without a chair, oldest request first."""
        try:
            return list(
                Ride.objects.filter(chair__isnull=True).order_by("created_at", "id")
            )
        except DatabaseError as exc:
            raise RepositoryError("Failed to load unmatched rides") from exc

    def eligible_chairs(self) -> List[ChairCandidate]:
        """
        Active chairs that have a known position and are not serving an
        incomplete ride, in registration order.

        Chairs that never reported a location are left out since no
        distance can be computed for them.
        """
        latest_location = (
            ChairLocation.objects
            .filter(chair=OuterRef("pk"))
            .order_by("-created_at", "-id")
        )
        queryset = (
            Chair.objects
            .filter(is_active=True)
            .annotate(
                current_latitude=Subquery(latest_location.values("latitude")[:1]),
                current_longitude=Subquery(latest_location.values("longitude")[:1]),
            )
            .filter(current_latitude__isnull=False, current_longitude__isnull=False)
            .filter(~Exists(incomplete_rides().filter(chair=OuterRef("pk"))))
            .order_by("created_at", "id")
            .values_list("id", "current_latitude", "current_longitude")
        )
        try:
            return [
                ChairCandidate(chair_id=chair_id, latitude=float(lat), longitude=float(lon))
                for chair_id, lat, lon in queryset
            ]
        except DatabaseError as exc:
            raise RepositoryError("Failed to load eligible chairs") from exc

    def try_assign_chair(self, ride_id: int, chair_id: int) -> bool:
        """
        Assign ``chair_id`` to ``ride_id`` if the ride is still unassigned and
        the chair is still free.

        Returns:
            True if this call claimed the ride, False on an assignment conflict

        Raises:
            RepositoryError: If the store rejects the write
        """
        try:
            with transaction.atomic():
                self._claim(ride_id, chair_id)
                transaction.on_commit(lambda: _notify_matched(ride_id))
        except AssignmentConflict as exc:
            logger.info("Chair %s not assigned to ride %s: %s", chair_id, ride_id, exc)
            return False
        except DatabaseError as exc:
            raise RepositoryError(
                f"Failed to assign chair {chair_id} to ride {ride_id}"
            ) from exc
        return True

    def _claim(self, ride_id: int, chair_id: int) -> None:
        # Lock the chair row so concurrent claims on the same chair serialize
        chair = Chair.objects.select_for_update().filter(id=chair_id).first()
        if chair is None or not chair.is_active:
            raise AssignmentConflict("chair is no longer active")

        if incomplete_rides().filter(chair_id=chair_id).exists():
            raise AssignmentConflict("chair is serving an incomplete ride")

        updated = Ride.objects.filter(id=ride_id, chair__isnull=True).update(
            chair_id=chair_id,
            updated_at=timezone.now(),
        )
        if updated != 1:
            raise AssignmentConflict("ride is already claimed")


def _notify_matched(ride_id: int) -> None:
    from rides.notifications import notify_chair_event

    # Runs after commit: errors are logged, never raised into the cycle
    try:
        ride = Ride.objects.select_related("chair").filter(id=ride_id).first()
        if ride is not None:
            notify_chair_event("ride_matched", ride, "A ride has been assigned to you.")
    except Exception:
        logger.exception("Failed to notify chair about ride %s", ride_id)
