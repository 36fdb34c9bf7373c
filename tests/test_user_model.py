"""Tests for the User model helpers and the admin seed script."""

import logging

import pytest

from auth.errors import ValidationError
from auth.policy import Role
from models import db
from models.user import User
from scripts import seed_admin as seed_script
from scripts.seed_admin import seed_admin


def test_role_follows_admin_flag(app_ctx):
    user = User(
        email="helper@example.com",
        password_hash="hash",
        name="Helper",
        first_name="Hal",
        country="X",
    )
    db.session.add(user)
    db.session.commit()

    assert user.is_admin is False
    assert user.verified is False
    assert user.role is Role.MEMBER

    user.is_admin = True
    db.session.commit()
    db.session.refresh(user)

    assert user.role is Role.ADMIN


def test_to_dict_hides_password_hash(app_ctx, make_user):
    data = make_user("member@example.com").to_dict()

    assert "password_hash" not in data
    assert data["firstName"] == "Jane"
    assert data["isAdmin"] is False


def test_seed_admin_creates_then_updates(app_ctx, service):
    admin, action = seed_admin("admin@example.com", "adminpassword")

    assert action == "created"
    assert admin.is_admin is True
    assert admin.verified is True
    assert (admin.name, admin.first_name, admin.country) == ("Admin", "Default", "AdminLand")
    assert service.hasher.verify("adminpassword", admin.password_hash)

    admin, action = seed_admin("admin@example.com", "rotated-password")

    assert action == "updated"
    assert User.query.filter_by(email="admin@example.com").count() == 1
    assert service.hasher.verify("rotated-password", admin.password_hash)


@pytest.mark.parametrize("password", ["short", "p" * 73, "é" * 37])
def test_seed_admin_rejects_passwords_signup_would_reject(app_ctx, service, password):
    with pytest.raises(ValidationError) as excinfo:
        seed_admin("admin@example.com", password)

    assert excinfo.value.field == "password"
    assert User.query.filter_by(email="admin@example.com").first() is None


def test_seed_script_exits_with_a_clear_log_line(app, monkeypatch, caplog):
    app.config["SEED_ADMIN_PASSWORD"] = "p" * 80
    monkeypatch.setattr(seed_script, "create_app", lambda: app)

    with caplog.at_level(logging.ERROR, logger="scripts.seed_admin"):
        with pytest.raises(SystemExit) as excinfo:
            seed_script.main()

    assert excinfo.value.code == 1
    assert "SEED_ADMIN_PASSWORD rejected" in caplog.text
    assert "72 bytes" in caplog.text
