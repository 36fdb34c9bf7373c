"""Signed, time-bounded identity tokens."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from .errors import ConfigurationError, TokenError

logger = logging.getLogger(__name__)

SUBJECT_CLAIM = "userId"
DEFAULT_LIFETIME = timedelta(hours=1)
DEFAULT_ALGORITHM = "HS256"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify HMAC-signed JWTs carrying a user identifier.

    The signing secret is fixed for the lifetime of the service. Constructing
    a service without one is a configuration error so the application refuses
    to start instead of failing on the first request.
    """

    def __init__(
        self,
        secret: str | None,
        *,
        lifetime: timedelta = DEFAULT_LIFETIME,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], datetime] = _utc_now,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET_KEY must be configured.")
        self._secret = secret
        self.lifetime = lifetime
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: int) -> str:
        """Return a token for ``user_id`` that expires after ``lifetime``."""

        issued_at = self._clock()
        payload = {
            SUBJECT_CLAIM: user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Check signature and expiry and return the embedded user id."""

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", SUBJECT_CLAIM]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenError(TokenError.EXPIRED) from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected malformed token: %s", exc)
            raise TokenError(TokenError.MALFORMED) from exc

        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        if self._clock() >= expires_at:
            raise TokenError(TokenError.EXPIRED)

        subject = payload[SUBJECT_CLAIM]
        if isinstance(subject, bool) or not isinstance(subject, int):
            raise TokenError(TokenError.MALFORMED)
        return subject
