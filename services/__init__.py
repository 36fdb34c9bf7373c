"""Application services."""

from .blog_service import Allowed, AuthRequest, BlogService, Decision, Denied

__all__ = ["Allowed", "AuthRequest", "BlogService", "Decision", "Denied"]
