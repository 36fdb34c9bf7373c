"""Bridge between Flask views and the blog gateway."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping

from flask import current_app, jsonify, request
from werkzeug.exceptions import (
    BadRequest,
    Conflict,
    Forbidden,
    HTTPException,
    InternalServerError,
    NotFound,
    Unauthorized,
)

from auth.errors import DenialKind
from auth.policy import Action
from services.blog_service import AuthRequest, BlogService, Denied

EXTENSION_KEY = "quill"

DENIAL_EXCEPTIONS: dict[DenialKind, type[HTTPException]] = {
    DenialKind.INVALID: BadRequest,
    DenialKind.UNAUTHENTICATED: Unauthorized,
    DenialKind.INVALID_CREDENTIALS: Unauthorized,
    DenialKind.FORBIDDEN: Forbidden,
    DenialKind.NOT_FOUND: NotFound,
    DenialKind.CONFLICT: Conflict,
    DenialKind.INTERNAL: InternalServerError,
}


def current_service() -> BlogService:
    return current_app.extensions[EXTENSION_KEY]


def bearer_token() -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Any other non-empty header value is passed through unchanged so it fails
    token verification instead of looking like a missing header.
    """

    header = request.headers.get("Authorization", "").strip()
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return header


def dispatch(action: Action, payload: Mapping[str, Any] | None = None) -> Any:
    """Run ``action`` and return its result, raising an HTTP error on denial."""

    decision = current_service().handle(
        AuthRequest(action=action, payload=payload or {}, bearer_token=bearer_token())
    )
    if isinstance(decision, Denied):
        raise DENIAL_EXCEPTIONS[decision.kind](decision.message)
    return decision.result


def token_response(message: str, result: dict, status: HTTPStatus):
    """Return the token in the body and the ``Authorization`` header."""

    response = jsonify({"message": message, "token": result["token"], "user": result["user"]})
    response.status_code = status
    response.headers["Authorization"] = f"Bearer {result['token']}"
    return response
