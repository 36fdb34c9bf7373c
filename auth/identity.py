"""Resolve a verified token subject to a stored account."""

from __future__ import annotations

from typing import Any

from store.abstract_store import USERS, AbstractStore

from .errors import IdentityError, NotFound


class IdentityResolver:
    def __init__(self, store: AbstractStore):
        self.store = store

    def resolve(self, user_id: int) -> Any:
        """Load the account behind ``user_id``.

        Tokens are not revoked when an account disappears, so a valid token can
        still point at nothing; that case is an authentication failure.
        """

        try:
            return self.store.find_by_id(USERS, user_id)
        except NotFound as exc:
            raise IdentityError() from exc
