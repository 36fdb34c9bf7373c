"""Store backends.

The SQLAlchemy backend lives in :mod:`store.sqlalchemy_store` and is imported
directly so the contract stays free of model imports.
"""

from .abstract_store import COMMENTS, POSTS, TABLES, USERS, AbstractStore

__all__ = ["AbstractStore", "USERS", "POSTS", "COMMENTS", "TABLES"]
