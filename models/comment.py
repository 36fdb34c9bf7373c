"""Comment model definition."""

from datetime import datetime

from . import db


class Comment(db.Model):
    """A comment left on a post."""

    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id"),
        nullable=False,
        index=True,
    )
    author_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    post = db.relationship("Post", back_populates="comments")
    author = db.relationship("User", back_populates="comments")

    @property
    def owner_id(self) -> int:
        return self.author_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "postId": self.post_id,
            "userId": self.author_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
