"""Posts blueprint with comment endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from auth.policy import Action
from routes.dispatch import dispatch
from utils.request_validation import parse_json_request

posts_bp = Blueprint("posts", __name__)


@posts_bp.route("", methods=["GET"])
def list_posts():
    posts = dispatch(Action.LIST_POSTS)
    return jsonify({"results": posts, "count": len(posts)})


@posts_bp.route("/<int:post_id>", methods=["GET"])
def get_post(post_id: int):
    return jsonify(dispatch(Action.GET_POST, {"id": post_id}))


@posts_bp.route("", methods=["POST"])
def create_post():
    """Create a post owned by the caller."""

    payload = parse_json_request(request, allow_empty=True)
    post = dispatch(Action.CREATE_POST, payload)
    return jsonify({"message": "Post created successfully", "post": post}), HTTPStatus.CREATED


@posts_bp.route("/<int:post_id>", methods=["PUT"])
def update_post(post_id: int):
    """Update title and/or content. Owner only."""

    payload = parse_json_request(request, allow_empty=True)
    post = dispatch(Action.UPDATE_POST, {**payload, "id": post_id})
    return jsonify({"message": "Post updated successfully", "post": post})


@posts_bp.route("/<int:post_id>", methods=["DELETE"])
def delete_post(post_id: int):
    """Delete a post and its comments. Owner only."""

    dispatch(Action.DELETE_POST, {"id": post_id})
    return jsonify({"message": "Post deleted successfully"})


@posts_bp.route("/<int:post_id>/comments", methods=["POST"])
def create_comment(post_id: int):
    payload = parse_json_request(request, allow_empty=True)
    comment = dispatch(Action.CREATE_COMMENT, {**payload, "postId": post_id})
    return (
        jsonify({"message": "Comment created successfully", "comment": comment}),
        HTTPStatus.CREATED,
    )


@posts_bp.route("/comments/<int:comment_id>", methods=["PUT"])
def update_comment(comment_id: int):
    payload = parse_json_request(request, allow_empty=True)
    comment = dispatch(Action.UPDATE_COMMENT, {**payload, "id": comment_id})
    return jsonify({"message": "Comment updated successfully", "comment": comment})


@posts_bp.route("/comments/<int:comment_id>", methods=["DELETE"])
def delete_comment(comment_id: int):
    dispatch(Action.DELETE_COMMENT, {"id": comment_id})
    return jsonify({"message": "Comment deleted successfully"})
