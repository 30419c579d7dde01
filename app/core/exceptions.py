"""
Domain error taxonomy for the Event Manager Service.

Every failure a service can report is one of the kinds below. Each kind carries
the HTTP status and reason phrase used by the API error handlers.
"""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of domain error kinds with their HTTP mapping."""
    # Values must stay unique, otherwise Enum turns members into aliases
    NOT_FOUND = ("not_found", 404, "Not Found")
    ALREADY_EXISTS = ("already_exists", 409, "Conflict")
    IN_USE = ("in_use", 409, "Conflict")
    UNAUTHORIZED = ("unauthorized", 403, "Forbidden")
    VALIDATION = ("validation", 400, "Bad Request")

    def __init__(self, code: str, status_code: int, reason: str):
        self.code = code
        self.status_code = status_code
        self.reason = reason


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Referenced user or event does not exist."""
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(ServiceError):
    """Uniqueness violation on a user field."""
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class ResourceInUseError(ServiceError):
    """Resource cannot be removed while other records reference it."""
    kind = ErrorKind.IN_USE


class UnauthorizedError(ServiceError):
    """Actor is not allowed to modify the resource."""
    kind = ErrorKind.UNAUTHORIZED


class InvalidQueryError(ServiceError):
    """Listing parameters cannot be turned into a query."""
    kind = ErrorKind.VALIDATION
