"""
Error taxonomy raised by the service layer.

Each error carries the HTTP status it maps to; ``api.main`` renders any
``ServiceError`` as ``{"detail": message}`` with that status.
"""
from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ServiceError):
    """Unknown account or wrong password."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ServiceError):
    """A unique key (email) is already taken."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundOrForbiddenError(ServiceError):
    """
    The resource does not exist or belongs to another user.

    Both cases share one error so callers cannot probe for other users' ids.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")
