"""User model definition."""

from datetime import datetime

from auth.policy import Role

from . import db


class User(db.Model):
    """Represents a registered author."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    first_name = db.Column(db.String(120), nullable=False)
    country = db.Column(db.String(120), nullable=False)
    is_admin = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    # Reserved; no operation reads it.
    verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    posts = db.relationship("Post", back_populates="author", lazy="dynamic")
    comments = db.relationship("Comment", back_populates="author", lazy="dynamic")

    @property
    def role(self) -> Role:
        return Role.ADMIN if self.is_admin else Role.MEMBER

    def to_dict(self) -> dict:
        """Serialize the user without the password verifier."""

        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "firstName": self.first_name,
            "country": self.country,
            "isAdmin": bool(self.is_admin),
            "verified": bool(self.verified),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
