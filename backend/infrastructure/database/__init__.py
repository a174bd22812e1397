"""
Persistence for subscribers, confirmation tokens and operator accounts.
"""

from .connection import (
    Base,
    async_session_maker,
    close_db,
    create_engine,
    engine,
    get_db,
    get_db_context,
    init_db,
)

__all__ = [
    "Base",
    "async_session_maker",
    "close_db",
    "create_engine",
    "engine",
    "get_db",
    "get_db_context",
    "init_db",
]
