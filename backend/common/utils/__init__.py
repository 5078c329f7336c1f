"""Common utility functions."""

from .geo import calculate_distance, total_path_distance

__all__ = [
    "calculate_distance",
    "total_path_distance",
]
