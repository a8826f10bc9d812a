"""Database package: declarative base, async engine and request-scoped sessions."""

from liftlog.db.base import Base
from liftlog.db.session import async_session_maker, engine, get_db

__all__ = ["Base", "async_session_maker", "engine", "get_db"]
