"""Gateway that runs blog actions through authentication and authorization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from auth.errors import (
    AuthError,
    ConflictError,
    DenialKind,
    InvalidCredentials,
    Unauthorized,
)
from auth.hashing import CredentialHasher
from auth.identity import IdentityResolver
from auth.policy import PUBLIC_ACTIONS, Action, AuthorizationPolicy
from auth.tokens import TokenService
from store.abstract_store import COMMENTS, POSTS, USERS, AbstractStore

from . import validators

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both login failures cost a
# bcrypt round.
_TIMING_PLACEHOLDER = "placeholder-password"


@dataclass(frozen=True)
class AuthRequest:
    action: Action
    payload: Mapping[str, Any] = field(default_factory=dict)
    bearer_token: Optional[str] = None


@dataclass(frozen=True)
class Allowed:
    result: Any

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Denied:
    kind: DenialKind
    message: str

    @property
    def allowed(self) -> bool:
        return False


Decision = Union[Allowed, Denied]


class BlogService:
    """Execute one request at a time and report an explicit decision.

    Nothing raised by the core escapes :meth:`handle`; every :class:`AuthError`
    becomes a :class:`Denied` value.
    """

    def __init__(
        self,
        store: AbstractStore,
        hasher: CredentialHasher,
        tokens: TokenService,
        policy: AuthorizationPolicy | None = None,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.policy = policy or AuthorizationPolicy()
        self.identity = IdentityResolver(store)
        self._placeholder_verifier: str | None = None
        self._handlers: dict[Action, Callable[[Any, Mapping[str, Any]], Any]] = {
            Action.SIGNUP: self._signup,
            Action.LOGIN: self._login,
            Action.ADMIN_LOGIN: self._admin_login,
            Action.LIST_USERS: self._list_users,
            Action.PROMOTE_USER: self._promote_user,
            Action.LIST_POSTS: self._list_posts,
            Action.GET_POST: self._get_post,
            Action.CREATE_POST: self._create_post,
            Action.UPDATE_POST: self._update_post,
            Action.DELETE_POST: self._delete_post,
            Action.CREATE_COMMENT: self._create_comment,
            Action.UPDATE_COMMENT: self._update_comment,
            Action.DELETE_COMMENT: self._delete_comment,
        }

    def handle(self, request: AuthRequest) -> Decision:
        handler = self._handlers[request.action]
        try:
            account = self.authenticate(request)
            result = handler(account, request.payload)
        except AuthError as exc:
            if exc.kind is DenialKind.INTERNAL:
                logger.exception("Internal error while handling %s", request.action.value)
            return Denied(exc.kind, exc.message)
        return Allowed(result)

    def authenticate(self, request: AuthRequest):
        """Return the caller's account, or ``None`` for public actions."""

        if request.action in PUBLIC_ACTIONS:
            return None
        if not request.bearer_token:
            raise Unauthorized("Authorization header missing")
        user_id = self.tokens.verify(request.bearer_token)
        return self.identity.resolve(user_id)

    # Accounts

    def _signup(self, _account, payload: Mapping[str, Any]) -> dict:
        values = validators.validate_signup(payload)
        if self.store.find_unique_by_email(values["email"]) is not None:
            raise ConflictError("User already exists")

        user = self.store.create(
            USERS,
            {
                "name": values["name"],
                "first_name": values["firstName"],
                "email": values["email"],
                "country": values["country"],
                "password_hash": self.hasher.hash(values["password"]),
            },
        )
        logger.info("Created user %s", user.id)
        return {"token": self.tokens.issue(user.id), "user": user.to_dict()}

    def _check_credentials(self, email: str, password: str):
        """Return the matching user or ``None`` without revealing why."""

        user = self.store.find_unique_by_email(email)
        if user is None:
            self.hasher.verify(password, self._placeholder())
            return None
        if not self.hasher.verify(password, user.password_hash):
            return None
        return user

    def _placeholder(self) -> str:
        if self._placeholder_verifier is None:
            self._placeholder_verifier = self.hasher.hash(_TIMING_PLACEHOLDER)
        return self._placeholder_verifier

    def _login(self, _account, payload: Mapping[str, Any]) -> dict:
        email, password = validators.validate_credentials(payload)
        user = self._check_credentials(email, password)
        if user is None:
            logger.info("Rejected login attempt")
            raise InvalidCredentials()
        return {"token": self.tokens.issue(user.id), "user": user.to_dict()}

    def _admin_login(self, _account, payload: Mapping[str, Any]) -> dict:
        email, password = validators.validate_credentials(payload)
        user = self._check_credentials(email, password)
        try:
            self.policy.check_admin_login(user)
        except InvalidCredentials:
            logger.info("Rejected admin login attempt")
            raise
        return {"token": self.tokens.issue(user.id), "user": user.to_dict()}

    def _list_users(self, account, _payload) -> list:
        self.policy.authorize(account, Action.LIST_USERS)
        return [user.to_dict() for user in self.store.find_all(USERS)]

    def _promote_user(self, account, payload: Mapping[str, Any]) -> dict:
        self.policy.authorize(account, Action.PROMOTE_USER)
        target_id = validators.record_id(payload)
        target = self.store.find_by_id(USERS, target_id)
        if not target.is_admin:
            target = self.store.update(USERS, target_id, {"is_admin": True})
            logger.info("User %s promoted user %s to admin", account.id, target_id)
        return target.to_dict()

    # Posts

    def _list_posts(self, _account, _payload) -> list:
        return [post.to_dict() for post in self.store.find_all(POSTS)]

    def _get_post(self, _account, payload: Mapping[str, Any]) -> dict:
        post = self.store.find_by_id(POSTS, validators.record_id(payload))
        return post.to_dict(include_comments=True)

    def _create_post(self, account, payload: Mapping[str, Any]) -> dict:
        self.policy.authorize(account, Action.CREATE_POST)
        fields = validators.validate_new_post(payload)
        post = self.store.create(POSTS, {**fields, "author_id": account.id})
        return post.to_dict()

    def _update_post(self, account, payload: Mapping[str, Any]) -> dict:
        post_id = validators.record_id(payload)
        post = self.store.find_by_id(POSTS, post_id)
        self.policy.authorize(account, Action.UPDATE_POST, post)
        changes = validators.validate_post_changes(payload)
        return self.store.update(POSTS, post_id, changes).to_dict()

    def _delete_post(self, account, payload: Mapping[str, Any]) -> dict:
        post_id = validators.record_id(payload)
        post = self.store.find_by_id(POSTS, post_id)
        self.policy.authorize(account, Action.DELETE_POST, post)
        self.store.delete(POSTS, post_id)
        return {"id": post_id}

    # Comments

    def _create_comment(self, account, payload: Mapping[str, Any]) -> dict:
        self.policy.authorize(account, Action.CREATE_COMMENT)
        content = validators.validate_comment(payload)
        post_id = validators.record_id(payload, "postId")
        post = self.store.find_by_id(POSTS, post_id)
        comment = self.store.create(
            COMMENTS,
            {"content": content, "post_id": post.id, "author_id": account.id},
        )
        return comment.to_dict()

    def _update_comment(self, account, payload: Mapping[str, Any]) -> dict:
        comment_id = validators.record_id(payload)
        comment = self.store.find_by_id(COMMENTS, comment_id)
        self.policy.authorize(account, Action.UPDATE_COMMENT, comment)
        content = validators.validate_comment(payload)
        return self.store.update(COMMENTS, comment_id, {"content": content}).to_dict()

    def _delete_comment(self, account, payload: Mapping[str, Any]) -> dict:
        comment_id = validators.record_id(payload)
        comment = self.store.find_by_id(COMMENTS, comment_id)
        self.policy.authorize(account, Action.DELETE_COMMENT, comment)
        self.store.delete(COMMENTS, comment_id)
        return {"id": comment_id}
