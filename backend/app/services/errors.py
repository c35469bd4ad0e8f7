"""Service-level failures, mapped to HTTP statuses at the router boundary."""


class TripPlannerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TripPlannerError):
    status_code = 404


class ValidationFailure(TripPlannerError):
    status_code = 400


class DependencyFailure(TripPlannerError):
    """Datastore or rendering collaborator failed."""

    status_code = 500
