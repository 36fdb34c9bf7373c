"""Account and content store contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence


USERS = "users"
POSTS = "posts"
COMMENTS = "comments"
TABLES = (USERS, POSTS, COMMENTS)


class AbstractStore(ABC):
    """Interface the core uses to reach persisted users, posts and comments.

    Every method may raise ``NotFound`` when the target row is absent,
    ``ConflictError`` on a uniqueness violation and ``InternalError`` when the
    backend itself fails.
    """

    @abstractmethod
    def find_by_id(self, table: str, record_id: int) -> Any:
        """Return the record or raise ``NotFound``."""

    @abstractmethod
    def find_unique_by_email(self, email: str) -> Any | None:
        """Return the user with exactly this email, or ``None``."""

    @abstractmethod
    def find_all(self, table: str) -> Sequence[Any]:
        """Return every record of ``table`` ordered by id."""

    @abstractmethod
    def create(self, table: str, fields: Mapping[str, Any]) -> Any:
        """Insert a record and return it with its assigned id."""

    @abstractmethod
    def update(self, table: str, record_id: int, fields: Mapping[str, Any]) -> Any:
        """Apply ``fields`` to an existing record and return it."""

    @abstractmethod
    def delete(self, table: str, record_id: int) -> None:
        """Remove a record."""
