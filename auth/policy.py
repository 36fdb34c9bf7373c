"""Role and ownership based authorization decisions."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol

from .errors import Forbidden, InvalidCredentials, Unauthorized


class Role(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


class Action(str, Enum):
    """Every operation the gateway can be asked to perform."""

    SIGNUP = "signup"
    LOGIN = "login"
    ADMIN_LOGIN = "admin_login"
    LIST_USERS = "list_users"
    PROMOTE_USER = "promote_user"
    LIST_POSTS = "list_posts"
    GET_POST = "get_post"
    CREATE_POST = "create_post"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    CREATE_COMMENT = "create_comment"
    UPDATE_COMMENT = "update_comment"
    DELETE_COMMENT = "delete_comment"


PUBLIC_ACTIONS = frozenset(
    {Action.SIGNUP, Action.LOGIN, Action.ADMIN_LOGIN, Action.LIST_POSTS, Action.GET_POST}
)
ADMIN_ACTIONS = frozenset({Action.LIST_USERS, Action.PROMOTE_USER})
OWNERSHIP_ACTIONS = frozenset(
    {
        Action.UPDATE_POST,
        Action.DELETE_POST,
        Action.UPDATE_COMMENT,
        Action.DELETE_COMMENT,
    }
)
AUTHENTICATED_ACTIONS = frozenset({Action.CREATE_POST, Action.CREATE_COMMENT})


class Account(Protocol):
    id: int

    @property
    def role(self) -> Role: ...


class OwnedResource(Protocol):
    """Anything whose mutations are reserved to a single account."""

    @property
    def owner_id(self) -> int: ...


class AuthorizationPolicy:
    """Stateless allow/deny decisions.

    Rules are evaluated in a fixed order: public actions, admin-only actions,
    ownership actions, then actions that only need an authenticated caller.
    Each check either returns ``None`` or raises the matching error.
    """

    def authorize(
        self,
        account: Optional[Account],
        action: Action,
        resource: Optional[OwnedResource] = None,
    ) -> None:
        if action in PUBLIC_ACTIONS:
            return
        if account is None:
            raise Unauthorized("Authorization header missing")

        if action in ADMIN_ACTIONS:
            self.require_role(account, Role.ADMIN)
        elif action in OWNERSHIP_ACTIONS:
            if resource is None:
                raise ValueError(f"{action.value} needs the target resource")
            self.require_owner(account, resource)
        elif action in AUTHENTICATED_ACTIONS:
            return
        else:  # pragma: no cover - every Action is classified above
            raise Forbidden()

    @staticmethod
    def require_role(account: Account, role: Role) -> None:
        if account.role is not role:
            raise Forbidden("Unauthorized")

    @staticmethod
    def require_owner(account: Account, resource: OwnedResource) -> None:
        if resource.owner_id != account.id:
            raise Forbidden("You are not authorized to modify this resource")

    @staticmethod
    def check_admin_login(account: Optional[Account]) -> None:
        """Admin login treats a non-admin account exactly like a missing one."""

        if account is None or account.role is not Role.ADMIN:
            raise InvalidCredentials()
