"""Flask-SQLAlchemy implementation of the store contract."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from auth.errors import ConflictError, InternalError, NotFound
from models import Comment, Post, User

from .abstract_store import COMMENTS, POSTS, USERS, AbstractStore

logger = logging.getLogger(__name__)

MODELS = {
    USERS: User,
    POSTS: Post,
    COMMENTS: Comment,
}

NOT_FOUND_MESSAGES = {
    USERS: "User not found",
    POSTS: "Post not found",
    COMMENTS: "Comment not found",
}

CONFLICT_MESSAGES = {
    USERS: "User already exists",
    POSTS: "Post already exists",
    COMMENTS: "Comment already exists",
}

# SQLite and PostgreSQL integer keys are signed 64-bit.
MAX_RECORD_ID = 2**63 - 1


class SQLAlchemyStore(AbstractStore):
    """Persist records through a SQLAlchemy session.

    Each mutating call commits on its own; failures roll the session back and
    surface as store errors.
    """

    def __init__(self, session: Session):
        self.session = session

    def _model(self, table: str):
        try:
            return MODELS[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    def find_by_id(self, table: str, record_id: int) -> Any:
        model = self._model(table)
        if not 0 < record_id <= MAX_RECORD_ID:
            raise NotFound(NOT_FOUND_MESSAGES[table])
        try:
            record = self.session.get(model, record_id)
        except SQLAlchemyError as exc:
            raise InternalError() from exc
        if record is None:
            raise NotFound(NOT_FOUND_MESSAGES[table])
        return record

    def find_unique_by_email(self, email: str) -> User | None:
        try:
            return self.session.query(User).filter(User.email == email).one_or_none()
        except SQLAlchemyError as exc:
            raise InternalError() from exc

    def find_all(self, table: str) -> Sequence[Any]:
        model = self._model(table)
        try:
            return self.session.query(model).order_by(model.id.asc()).all()
        except SQLAlchemyError as exc:
            raise InternalError() from exc

    def create(self, table: str, fields: Mapping[str, Any]) -> Any:
        record = self._model(table)(**fields)
        self.session.add(record)
        self._commit(table)
        return record

    def update(self, table: str, record_id: int, fields: Mapping[str, Any]) -> Any:
        record = self.find_by_id(table, record_id)
        for name, value in fields.items():
            setattr(record, name, value)
        self._commit(table)
        return record

    def delete(self, table: str, record_id: int) -> None:
        record = self.find_by_id(table, record_id)
        self.session.delete(record)
        self._commit(table)

    def _commit(self, table: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.info("Integrity violation on %s: %s", table, exc.orig)
            raise ConflictError(CONFLICT_MESSAGES[table]) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise InternalError() from exc
