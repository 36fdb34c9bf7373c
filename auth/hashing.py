"""bcrypt password hashing."""

from __future__ import annotations

import bcrypt

from .errors import HashingError, VerificationError

DEFAULT_ROUNDS = 10
# bcrypt only reads this many bytes of a password; newer releases refuse more.
MAX_PASSWORD_BYTES = 72


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES]


class CredentialHasher:
    """Turn plaintext passwords into bcrypt verifiers and check them.

    Plaintexts longer than :data:`MAX_PASSWORD_BYTES` are cut to that many
    UTF-8 bytes before hashing and before comparing, the same way bcrypt
    itself always treated them.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password using bcrypt with a fresh salt."""

        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            hashed = bcrypt.hashpw(_password_bytes(plaintext), salt)
        except (TypeError, ValueError, MemoryError) as exc:
            raise HashingError() from exc
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, verifier: str) -> bool:
        """Return True when ``plaintext`` matches the stored verifier.

        A mismatch is a normal ``False``. Only a verifier that is not a bcrypt
        hash raises :class:`VerificationError`.
        """

        if not isinstance(verifier, str) or not verifier:
            raise VerificationError("Stored password verifier is missing.")
        try:
            return bcrypt.checkpw(_password_bytes(plaintext), verifier.encode("utf-8"))
        except (TypeError, ValueError) as exc:
            raise VerificationError() from exc
