"""Seed the default administrator user."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app  # noqa: E402
from auth.errors import ValidationError  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402
from routes.dispatch import current_service  # noqa: E402
from services.validators import validate_password  # noqa: E402

logger = logging.getLogger(__name__)

ADMIN_PROFILE = {
    "name": "Admin",
    "first_name": "Default",
    "country": "AdminLand",
}


def seed_admin(email: str, password: str) -> tuple[User, str]:
    """Create or update the administrator account inside an app context.

    The password must satisfy the signup length rules; otherwise
    :class:`ValidationError` is raised before anything is written.
    """

    validate_password(password)
    hasher = current_service().hasher
    admin = User.query.filter_by(email=email).first()
    if admin is None:
        admin = User(email=email, **ADMIN_PROFILE)
        db.session.add(admin)
        action = "created"
    else:
        action = "updated"
    admin.is_admin = True
    admin.verified = True
    admin.password_hash = hasher.hash(password)
    db.session.commit()
    return admin, action


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        email = app.config["SEED_ADMIN_EMAIL"]
        try:
            _, action = seed_admin(email, app.config["SEED_ADMIN_PASSWORD"])
        except ValidationError as exc:
            logger.error("SEED_ADMIN_PASSWORD rejected: %s", exc.message)
            raise SystemExit(1) from exc
        logger.info("Admin user %s: %s", action, email)


if __name__ == "__main__":
    main()
