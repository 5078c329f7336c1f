"""
Geographic utility functions.

This module provides the distance calculations used by chair dispatch.
"""

from typing import Iterable, Tuple


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the travel cost between two points as Manhattan distance.

    This is a cheap proxy for travel cost on the city grid, not a geodesic
    distance. Always non-negative.
    
    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point
    
    Returns:
        Sum of absolute coordinate differences
    """
    return abs(float(lat1) - float(lat2)) + abs(float(lon1) - float(lon2))


def total_path_distance(points: Iterable[Tuple[float, float]]) -> float:
    """
    Sum the distance between each consecutive pair of (lat, lon) points.

    Returns 0 for fewer than two points.
    """
    total = 0.0
    previous = None
    for lat, lon in points:
        if previous is not None:
            total += calculate_distance(previous[0], previous[1], lat, lon)
        previous = (lat, lon)
    return total
