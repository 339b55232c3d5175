"""Error taxonomy for the registry core.

Each error is an ``HTTPException`` so services can raise it directly and
FastAPI renders it with the matching status code.
"""
from typing import Any, Optional

from fastapi import HTTPException, status


class RegistryError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Registry error"

    def __init__(self, detail: Any = None, headers: Optional[dict[str, str]] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail if detail is not None else self.default_detail,
            headers=headers,
        )


class ValidationError(RegistryError):
    """Malformed or missing input. Never retried automatically."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class AuthenticationError(RegistryError):
    """Missing, malformed, expired or revoked credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"

    def __init__(self, detail: Any = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(RegistryError):
    """Role check failed. No state change occurs."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Operation not permitted for this role"


class NotFoundError(RegistryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class AlreadyReservedError(RegistryError):
    """Lost the race for a gift. The caller must pick a different one."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Gift has already been reserved. Re-fetch the catalog and pick another."


class ConflictError(RegistryError):
    """A concurrent write changed the record between read and conditional update."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Record was modified concurrently. Re-fetch and retry."


class StorageError(RegistryError):
    """Persistence unavailable. Safe for the caller to retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage temporarily unavailable. Try again."
