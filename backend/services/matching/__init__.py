"""
Ride-to-chair matching service.

This module handles:
    - Reading unmatched rides and eligible chairs
    - Greedy nearest-chair assignment, oldest ride first
    - Conditional (compare-and-swap) chair claims
"""

from .engine import MatchingEngine, MatchResult, run_matching_cycle, select_nearest_chair
from .exceptions import AssignmentConflict, RepositoryError
from .repository import ChairCandidate, RideChairRepository

__all__ = [
    "MatchingEngine",
    "MatchResult",
    "run_matching_cycle",
    "select_nearest_chair",
    "ChairCandidate",
    "RideChairRepository",
    "AssignmentConflict",
    "RepositoryError",
]
