"""
Greedy ride-to-chair matching.

One cycle:
1. Load unmatched rides (oldest first) and eligible chairs
2. For each ride, pick the nearest chair still unclaimed in this cycle
3. Skip rides whose nearest chair is beyond the matching radius
4. Claim each pair with a conditional write; a failed claim only affects that ride

Overlapping cycles are safe: every claim is conditioned on the ride still
being unassigned and the chair still being free at write time.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from django.conf import settings

from common.utils import calculate_distance
from rides.models import Ride
from .exceptions import RepositoryError
from .repository import ChairCandidate, RideChairRepository

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Outcome of one matching cycle."""
    matched_count: int = 0


def select_nearest_chair(ride: Ride, chairs: Sequence[ChairCandidate]) -> Tuple[int, float]:
    """
    Find the chair closest to the ride's pickup point.

    Ties go to the chair that appears first in ``chairs``.

    Returns:
        (index into ``chairs``, cost); ``chairs`` must not be empty
    """
    best_index = 0
    best_cost = None
    for index, chair in enumerate(chairs):
        cost = calculate_distance(
            ride.pickup_latitude,
            ride.pickup_longitude,
            chair.latitude,
            chair.longitude,
        )
        if best_cost is None or cost < best_cost:
            best_index, best_cost = index, cost
    return best_index, best_cost


class MatchingEngine:
    """
    Pairs waiting rides with idle chairs.

    Args:
        repository: Store access; defaults to the ORM-backed repository
        max_radius: Largest cost at which a chair is still dispatched. Falls
            back to ``settings.MATCHING_MAX_RADIUS``; None means unbounded.
    """

    def __init__(self, repository: Optional[RideChairRepository] = None, max_radius: Optional[float] = None):
        self.repository = repository or RideChairRepository()
        if max_radius is None:
            max_radius = getattr(settings, "MATCHING_MAX_RADIUS", None)
        self.max_radius = max_radius

    def run_matching_cycle(self) -> MatchResult:
        """
        Run one matching pass over the current rides and chairs.

        Returns:
            MatchResult with the number of rides claimed in this pass

        Raises:
            RepositoryError: If rides or chairs cannot be read
        """
        rides = self.repository.unmatched_rides()
        if not rides:
            return MatchResult()

        chairs: List[ChairCandidate] = list(self.repository.eligible_chairs())
        if not chairs:
            logger.debug("%d ride(s) waiting but no eligible chairs", len(rides))
            return MatchResult()

        matched = 0
        for ride in rides:
            if not chairs:
                break

            index, cost = select_nearest_chair(ride, chairs)
            if self.max_radius is not None and cost > self.max_radius:
                logger.debug(
                    "Ride %s skipped: nearest chair %s is %.6f away (radius=%s)",
                    ride.id, chairs[index].chair_id, cost, self.max_radius,
                )
                continue

            chair = chairs[index]
            try:
                assigned = self.repository.try_assign_chair(ride.id, chair.chair_id)
            except RepositoryError:
                logger.warning(
                    "Failed to commit chair %s for ride %s; retrying next cycle",
                    chair.chair_id, ride.id, exc_info=True,
                )
                continue

            if assigned:
                # Only a claimed chair leaves the working set
                chairs.pop(index)
                matched += 1
                logger.debug("Ride %s matched with chair %s (cost=%.6f)", ride.id, chair.chair_id, cost)

        logger.info(
            "Matching cycle: %d waiting ride(s), %d matched",
            len(rides), matched,
        )
        return MatchResult(matched_count=matched)


def run_matching_cycle(max_radius: Optional[float] = None) -> MatchResult:
    """Run a single matching cycle against the database."""
    return MatchingEngine(max_radius=max_radius).run_matching_cycle()
