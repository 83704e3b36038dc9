"""Persistence layer for Scribe.

This module provides:
- Async SQLAlchemy engine and session factory
- ORM tables for users and posts
- PostGateway, the interface the listing cache and post services depend on
- SQL repositories implementing it
"""

from scribe.persistence.db import close_db, get_engine, get_session, init_db
from scribe.persistence.gateway import PostFilter, PostGateway
from scribe.persistence.repositories import PostRepository, UserRepository
from scribe.persistence.tables import Base, PostTable, UserTable

__all__ = [
    # DB
    "get_engine",
    "get_session",
    "init_db",
    "close_db",
    # Tables
    "Base",
    "UserTable",
    "PostTable",
    # Gateway
    "PostFilter",
    "PostGateway",
    # Repositories
    "PostRepository",
    "UserRepository",
]
