"""Exceptions raised while matching rides to chairs."""


class RepositoryError(Exception):
    """Raised when reading from or writing to the ride/chair store fails."""
    pass


class AssignmentConflict(Exception):
    """Raised when a conditional chair assignment finds the ride or chair already claimed."""
    pass
