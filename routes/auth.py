"""Authentication blueprint providing signup and login endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from auth.policy import Action
from routes.dispatch import dispatch, token_response
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/signup", methods=["POST"])
def signup():
    """Register a new user and return an access token."""
    payload = parse_json_request(request, allow_empty=True)
    result = dispatch(Action.SIGNUP, payload)
    return token_response("User created successfully", result, HTTPStatus.CREATED)


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    payload = parse_json_request(request, allow_empty=True)
    result = dispatch(Action.LOGIN, payload)
    return (
        jsonify({"message": "Login successful", "token": result["token"], "user": result["user"]}),
        HTTPStatus.OK,
    )
