"""Domain errors raised by the services and mapped to HTTP in main."""


class GymTrackerError(Exception):
    """Base class for domain errors."""

    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class UserNotFound(GymTrackerError):
    status_code = 404
    detail = "User not found"


class UserAlreadyExists(GymTrackerError):
    status_code = 409
    detail = "User already exists"


class ExerciseAlreadyExists(GymTrackerError):
    status_code = 409
    detail = "Exercise already exists"


class StoreError(GymTrackerError):
    """The database could not be reached or the statement failed."""

    status_code = 500
    detail = "Storage unavailable"


class InvalidInput(GymTrackerError):
    """Request data the services refuse, e.g. an empty name or a negative limit."""

    status_code = 422
    detail = "Invalid input"
