"""Application factory."""

import json
import os
import uuid
from datetime import datetime, timedelta, timezone

from flask import Flask, jsonify, g, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from auth.hashing import CredentialHasher
from auth.tokens import TokenService
from config import Config
from models import db
from routes.admin import admin_bp
from routes.auth import auth_bp
from routes.dispatch import EXTENSION_KEY
from routes.posts import posts_bp
from services.blog_service import BlogService
from store.sqlalchemy_store import SQLAlchemyStore
from utils.log_config import configure_logging

migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    app.extensions[EXTENSION_KEY] = _build_service(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    headers_enabled = app.config.get("RATELIMIT_HEADERS_ENABLED", True)
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())

    global limiter
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "100 per 15 minutes")],
        storage_uri=storage_uri,
        headers_enabled=headers_enabled,
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/user")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")
    app.register_blueprint(posts_bp, url_prefix="/api/posts")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_request_hooks(app)
    _register_error_handlers(app)

    return app


def _build_service(app: Flask) -> BlogService:
    """Wire the auth core from configuration; fails fast without a secret."""

    tokens = TokenService(
        app.config.get("JWT_SECRET_KEY"),
        lifetime=timedelta(seconds=int(app.config.get("JWT_ACCESS_TOKEN_EXPIRES", 3600))),
        algorithm=app.config.get("JWT_ALGORITHM", "HS256"),
    )
    hasher = CredentialHasher(rounds=int(app.config.get("BCRYPT_ROUNDS", 10)))
    return BlogService(SQLAlchemyStore(db.session), hasher, tokens)


def _register_request_hooks(app: Flask) -> None:
    """Assign request IDs and log each incoming request."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        app.logger.info(
            "%s %s - %s",
            request.method,
            request.path,
            datetime.now(timezone.utc).isoformat(),
        )

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred.",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
