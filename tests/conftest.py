"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402
from routes.dispatch import EXTENSION_KEY  # noqa: E402
from services.blog_service import BlogService  # noqa: E402

TEST_SECRET = "test-signing-secret-for-the-flask-suite"


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = TEST_SECRET
    # bcrypt's minimum cost keeps the suite fast.
    BCRYPT_ROUNDS = 4
    LOG_TO_FILE = False


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application instance for tests."""

    class TestConfig(_BaseTestConfig):
        LOG_DIR = str(tmp_path / "logs")

    application = create_app(TestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def app_ctx(app: Flask):
    """Push an application context for tests that talk to the store directly."""

    with app.app_context():
        yield app


@pytest.fixture()
def service(app: Flask) -> BlogService:
    return app.extensions[EXTENSION_KEY]


@pytest.fixture()
def make_user(service: BlogService):
    """Persist a user with a real bcrypt verifier. Requires an app context."""

    def _make_user(
        email: str,
        password: str = "secret1",
        *,
        is_admin: bool = False,
        name: str = "Doe",
        first_name: str = "Jane",
        country: str = "X",
    ) -> User:
        user = User(
            email=email,
            password_hash=service.hasher.hash(password),
            name=name,
            first_name=first_name,
            country=country,
            is_admin=is_admin,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user
