"""Payload validation for gateway actions."""

from __future__ import annotations

import re
from typing import Any, Mapping

from auth.errors import ValidationError
from auth.hashing import MAX_PASSWORD_BYTES

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s.]+(\.[^@\s.]+)+$")
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = MAX_PASSWORD_BYTES

SIGNUP_FIELDS = ("name", "firstName", "email", "country", "password")


def _text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'"{key}" must be a string', field=key)
    return value


def _required_text(payload: Mapping[str, Any], key: str) -> str:
    value = _text(payload, key)
    if value is None or not value.strip():
        raise ValidationError(f'"{key}" is required', field=key)
    return value


def validate_password(value: str) -> str:
    """Apply the signup length rules to a plaintext password."""

    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f'"password" length must be at least {PASSWORD_MIN_LENGTH} characters long',
            field="password",
        )
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(
            f'"password" must be at most {PASSWORD_MAX_BYTES} bytes long',
            field="password",
        )
    return value


def validate_signup(payload: Mapping[str, Any]) -> dict[str, str]:
    """Check every signup field in order and stop at the first failure."""

    values = {}
    for key in SIGNUP_FIELDS:
        value = _required_text(payload, key)
        if key == "email" and not EMAIL_PATTERN.match(value):
            raise ValidationError('"email" must be a valid email', field=key)
        if key == "password":
            validate_password(value)
        values[key] = value
    return values


def validate_credentials(payload: Mapping[str, Any]) -> tuple[str, str]:
    email = _text(payload, "email")
    password = _text(payload, "password")
    if not email or not password:
        raise ValidationError("Email and password are required")
    return email, password


def validate_new_post(payload: Mapping[str, Any]) -> dict[str, str]:
    title = _text(payload, "title")
    content = _text(payload, "content")
    if not title or not content:
        raise ValidationError("Title and content are required")
    return {"title": title, "content": content}


def validate_post_changes(payload: Mapping[str, Any]) -> dict[str, str]:
    """Return only the fields present; at least one is needed."""

    changes = {}
    for key in ("title", "content"):
        value = _text(payload, key)
        if value:
            changes[key] = value
    if not changes:
        raise ValidationError(
            "At least one field (title or content) is required to update"
        )
    return changes


def validate_comment(payload: Mapping[str, Any]) -> str:
    content = _text(payload, "content")
    if not content:
        raise ValidationError("Content is required", field="content")
    return content


def record_id(payload: Mapping[str, Any], key: str = "id") -> int:
    value = payload.get(key)
    if isinstance(value, bool):
        raise ValidationError(f'"{key}" must be an integer', field=key)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'"{key}" must be an integer', field=key) from None
