"""Typed failures raised by the goal and habit stores.

The HTTP layer maps each kind to a status code in `app.main`; nothing in
the stores turns these into silent defaults.
"""


class TrackerError(Exception):
    """Base class for every error the tracking core raises."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(TrackerError):
    """Goal, habit or log is missing or belongs to another owner."""

    status_code = 404


class ValidationError(TrackerError):
    """Malformed input that slipped past the request layer."""

    status_code = 422


class GoalConflict(ValidationError):
    """New goal would overlap a goal starting on or after its start date."""

    status_code = 409


class InvariantViolation(TrackerError):
    """Overlapping goals were observed. Always a defect, never user input."""

    status_code = 500


class StorageError(TrackerError):
    """Transaction or connection failure. The unit of work was rolled back."""

    status_code = 503
