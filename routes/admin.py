"""Administrator endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from auth.policy import Action
from routes.dispatch import dispatch, token_response
from utils.request_validation import parse_json_request

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/users", methods=["GET"])
def list_users():
    """Return every registered user. Admins only."""

    users = dispatch(Action.LIST_USERS)
    return jsonify({"users": users})


@admin_bp.route("/login", methods=["POST"])
def admin_login():
    """Log in with an administrator account."""

    payload = parse_json_request(request, allow_empty=True)
    result = dispatch(Action.ADMIN_LOGIN, payload)
    return token_response("LoggedIn successfully", result, HTTPStatus.CREATED)


@admin_bp.route("/promote/<int:user_id>", methods=["PUT"])
@admin_bp.route("/createAdmin/<int:user_id>", methods=["PUT"])
def promote_user(user_id: int):
    """Grant administrator rights to a user. Promoting an admin is a no-op."""

    user = dispatch(Action.PROMOTE_USER, {"id": user_id})
    return jsonify({"message": "User promoted to admin successfully", "user": user})
