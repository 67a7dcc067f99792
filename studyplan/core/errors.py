"""
Planner Errors.

The engine itself never raises for data problems; these are raised by the
service and CLI layers when a snapshot cannot be loaded.
"""


class PlannerError(Exception):
    """Base exception for the planner package."""
    pass


class PlannerInputError(PlannerError):
    """Raised when a planner snapshot is missing or fails validation."""
    pass
