"""Post model definition."""

from datetime import datetime

from . import db


class Post(db.Model):
    """A blog post owned by its author."""

    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
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

    author = db.relationship("User", back_populates="posts")
    comments = db.relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )

    @property
    def owner_id(self) -> int:
        return self.author_id

    def to_dict(self, include_comments: bool = False) -> dict:
        """Serialize the post."""

        data = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "authorId": self.author_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_comments:
            data["comments"] = [comment.to_dict() for comment in self.comments]
        return data

    def __repr__(self) -> str:
        return f"<Post id={self.id} author_id={self.author_id}>"
