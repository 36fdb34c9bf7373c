"""Error taxonomy shared by the authentication and authorization layer."""

from __future__ import annotations

from enum import Enum


class DenialKind(str, Enum):
    """Externally observable outcome of a rejected request."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID_CREDENTIALS = "invalid_credentials"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing."""


class AuthError(Exception):
    """Base class for every error that ends a request with a denial."""

    kind = DenialKind.INTERNAL
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    kind = DenialKind.INVALID
    default_message = "Invalid request payload."

    def __init__(self, message: str | None = None, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidCredentials(AuthError):
    kind = DenialKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class Unauthorized(AuthError):
    kind = DenialKind.UNAUTHENTICATED
    default_message = "Authentication required."


class TokenError(Unauthorized):
    """The bearer token is expired or cannot be trusted."""

    EXPIRED = "expired"
    MALFORMED = "malformed"

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason
        super().__init__(message or "Invalid or expired token")


class IdentityError(Unauthorized):
    """The token subject no longer maps to an account."""

    default_message = "User not found"


class Forbidden(AuthError):
    kind = DenialKind.FORBIDDEN
    default_message = "Unauthorized"


class NotFound(AuthError):
    kind = DenialKind.NOT_FOUND
    default_message = "Resource not found."


class ConflictError(AuthError):
    kind = DenialKind.CONFLICT
    default_message = "Resource already exists."


class InternalError(AuthError):
    kind = DenialKind.INTERNAL


class HashingError(InternalError):
    default_message = "Failed to hash password"


class VerificationError(InternalError):
    default_message = "Failed to compare passwords"
