"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(req: Request, *, allow_empty: bool = False) -> dict:
    """Return the parsed JSON object body or raise a 400 error.

    With ``allow_empty`` a missing or empty body yields ``{}`` so field level
    validation can name the first missing field.
    """

    if allow_empty and not req.get_data(cache=True):
        return {}

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    return data
