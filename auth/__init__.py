"""Authentication and authorization core."""

from .errors import (
    AuthError,
    ConfigurationError,
    ConflictError,
    DenialKind,
    Forbidden,
    HashingError,
    IdentityError,
    InternalError,
    InvalidCredentials,
    NotFound,
    TokenError,
    Unauthorized,
    ValidationError,
    VerificationError,
)
from .hashing import CredentialHasher
from .identity import IdentityResolver
from .policy import Action, AuthorizationPolicy, OwnedResource, Role
from .tokens import TokenService

__all__ = [
    "Action",
    "AuthError",
    "AuthorizationPolicy",
    "ConfigurationError",
    "ConflictError",
    "CredentialHasher",
    "DenialKind",
    "Forbidden",
    "HashingError",
    "IdentityError",
    "IdentityResolver",
    "InternalError",
    "InvalidCredentials",
    "NotFound",
    "OwnedResource",
    "Role",
    "TokenError",
    "TokenService",
    "Unauthorized",
    "ValidationError",
    "VerificationError",
]
