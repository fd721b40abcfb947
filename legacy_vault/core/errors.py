"""Domain errors raised by services and rendered by the API layer."""

from __future__ import annotations

from fastapi import status


class VaultError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(VaultError, ValueError):
    """Bad enum value, out-of-range number, malformed time, stale registration."""

    status_code = 422


class NotFoundError(VaultError, LookupError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(VaultError):
    """Duplicate registration data or an illegal state transition."""

    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(VaultError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamServiceError(VaultError):
    """An external provider (AI model, gateway) failed or returned unusable output."""

    status_code = status.HTTP_502_BAD_GATEWAY

