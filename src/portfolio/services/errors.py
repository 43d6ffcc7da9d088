"""Domain errors raised by services and mapped to HTTP responses by the API."""


class ServiceError(Exception):
    """Base class for service errors."""

    status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Requested entity does not exist."""

    status = 404


class ConflictError(ServiceError):
    """Operation conflicts with existing data."""


class StartPageDeletionError(ConflictError):
    """Attempt to delete the start page of a project."""

    def __init__(self) -> None:
        super().__init__("Cannot delete the start page")
