"""End-to-end tests for the HTTP endpoints."""

from __future__ import annotations

from flask.testing import FlaskClient

from models import db
from models.post import Post

SIGNUP = {
    "email": "a@b.com",
    "password": "secret1",
    "name": "A",
    "firstName": "A",
    "country": "X",
}


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _login(client: FlaskClient, email: str, password: str) -> str:
    response = client.post("/api/user/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.get_json()["token"]


def test_signup_returns_token_in_body_and_header(client: FlaskClient, service):
    response = client.post("/api/user/signup", json=SIGNUP)

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["message"] == "User created successfully"
    assert response.headers["Authorization"] == f"Bearer {payload['token']}"
    assert service.tokens.verify(payload["token"]) == payload["user"]["id"]


def test_duplicate_signup_returns_conflict(client: FlaskClient):
    client.post("/api/user/signup", json=SIGNUP)

    response = client.post("/api/user/signup", json=SIGNUP)

    assert response.status_code == 409
    assert response.get_json()["detail"] == "User already exists"


def test_signup_validation_error_names_field(client: FlaskClient):
    response = client.post("/api/user/signup", json={**SIGNUP, "password": "123"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert '"password"' in payload["detail"]
    assert payload["request_id"]


def test_signup_with_empty_body_reports_first_field(client: FlaskClient):
    response = client.post("/api/user/signup")

    assert response.status_code == 400
    assert response.get_json()["detail"] == '"name" is required'


def test_login_rejects_bad_credentials(client: FlaskClient, app_ctx, make_user):
    make_user("member@example.com", "secret1")

    wrong = client.post(
        "/api/user/login", json={"email": "member@example.com", "password": "wrong1"}
    )
    missing = client.post("/api/user/login", json={"email": "member@example.com"})

    assert wrong.status_code == 401
    assert wrong.get_json()["detail"] == "Invalid credentials"
    assert missing.status_code == 400


def test_admin_login_and_user_listing(client: FlaskClient, app_ctx, make_user):
    make_user("admin@example.com", "adminpassword", is_admin=True)
    make_user("member@example.com", "secret1")

    member_attempt = client.post(
        "/api/admin/login", json={"email": "member@example.com", "password": "secret1"}
    )
    assert member_attempt.status_code == 401
    assert member_attempt.get_json()["detail"] == "Invalid credentials"

    response = client.post(
        "/api/admin/login", json={"email": "admin@example.com", "password": "adminpassword"}
    )
    assert response.status_code == 201
    admin_token = response.get_json()["token"]

    users = client.get("/api/admin/users", headers=_auth(admin_token))
    assert users.status_code == 200
    emails = {user["email"] for user in users.get_json()["users"]}
    assert emails == {"admin@example.com", "member@example.com"}
    assert all("password_hash" not in user for user in users.get_json()["users"])

    member_token = _login(client, "member@example.com", "secret1")
    forbidden = client.get("/api/admin/users", headers=_auth(member_token))
    assert forbidden.status_code == 403


def test_admin_routes_require_token(client: FlaskClient):
    response = client.get("/api/admin/users")

    assert response.status_code == 401
    assert response.get_json()["detail"] == "Authorization header missing"


def test_malformed_authorization_header_is_rejected(client: FlaskClient):
    for header in ("Bearer not-a-token", "Token abc", "Bearer"):
        response = client.get("/api/admin/users", headers={"Authorization": header})
        assert response.status_code == 401
        assert response.get_json()["detail"] == "Invalid or expired token"


def test_promote_user_is_idempotent(client: FlaskClient, app_ctx, make_user):
    make_user("admin@example.com", "adminpassword", is_admin=True)
    member = make_user("member@example.com", "secret1")
    admin_token = _login(client, "admin@example.com", "adminpassword")

    first = client.put(f"/api/admin/promote/{member.id}", headers=_auth(admin_token))
    second = client.put(f"/api/admin/createAdmin/{member.id}", headers=_auth(admin_token))
    missing = client.put("/api/admin/promote/999", headers=_auth(admin_token))

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.get_json()["user"]["isAdmin"] is True
    assert missing.status_code == 404


def test_post_and_comment_flow(client: FlaskClient, app_ctx, make_user):
    make_user("u1@example.com", "secret1")
    make_user("u2@example.com", "secret2")
    owner = _auth(_login(client, "u1@example.com", "secret1"))
    other = _auth(_login(client, "u2@example.com", "secret2"))

    created = client.post("/api/posts", json={"title": "Hi", "content": "Body"}, headers=owner)
    assert created.status_code == 201
    post_id = created.get_json()["post"]["id"]

    updated = client.put(f"/api/posts/{post_id}", json={"title": "Hello"}, headers=owner)
    assert updated.status_code == 200
    post = updated.get_json()["post"]
    assert (post["title"], post["content"]) == ("Hello", "Body")

    hijack = client.put(f"/api/posts/{post_id}", json={"title": "Mine"}, headers=other)
    assert hijack.status_code == 403

    comment = client.post(
        f"/api/posts/{post_id}/comments", json={"content": "Nice"}, headers=other
    )
    assert comment.status_code == 201
    comment_id = comment.get_json()["comment"]["id"]

    assert client.put(
        f"/api/posts/comments/{comment_id}", json={"content": "Edit"}, headers=owner
    ).status_code == 403
    assert client.put(
        f"/api/posts/comments/{comment_id}", json={"content": "Edit"}, headers=other
    ).status_code == 200

    detail = client.get(f"/api/posts/{post_id}")
    assert detail.status_code == 200
    assert [c["content"] for c in detail.get_json()["comments"]] == ["Edit"]

    assert client.delete(f"/api/posts/{post_id}", headers=other).status_code == 403
    assert client.delete(f"/api/posts/{post_id}", headers=owner).status_code == 200
    assert client.get(f"/api/posts/{post_id}").status_code == 404
    assert db.session.get(Post, post_id) is None


def test_comment_on_missing_post_is_not_found(client: FlaskClient, app_ctx, make_user):
    make_user("u1@example.com", "secret1")
    token = _login(client, "u1@example.com", "secret1")

    response = client.post(
        "/api/posts/123/comments", json={"content": "hi"}, headers=_auth(token)
    )

    assert response.status_code == 404
    assert response.get_json()["detail"] == "Post not found"


def test_list_posts_is_public(client: FlaskClient):
    response = client.get("/api/posts")

    assert response.status_code == 200
    assert response.get_json() == {"results": [], "count": 0}


def test_non_json_body_is_rejected(client: FlaskClient):
    response = client.post("/api/user/login", data="not-json", content_type="text/plain")

    assert response.status_code == 400
    assert "Request content type" in response.get_json()["detail"]


def test_huge_ids_are_not_found(client: FlaskClient, app_ctx, make_user):
    make_user("u1@example.com", "secret1")
    token = _login(client, "u1@example.com", "secret1")
    huge = "99999999999999999999999"

    assert client.get(f"/api/posts/{huge}").status_code == 404
    assert client.delete(f"/api/posts/{huge}", headers=_auth(token)).status_code == 404
    response = client.put(
        f"/api/posts/comments/{huge}", json={"content": "x"}, headers=_auth(token)
    )
    assert response.status_code == 404
    assert response.get_json()["detail"] == "Comment not found"


def test_overlong_password_login_is_unauthorized(client: FlaskClient, app_ctx, make_user):
    make_user("u1@example.com", "secret1")

    for email in ("u1@example.com", "ghost@example.com"):
        response = client.post("/api/user/login", json={"email": email, "password": "x" * 80})
        assert response.status_code == 401
