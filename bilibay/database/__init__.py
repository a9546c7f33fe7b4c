"""
Database access: async engine/session management and the unit of work.
"""

from bilibay.database.async_db import get_async_db, get_async_db_context, get_async_engine
from bilibay.database.unit_of_work import IUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "get_async_db",
    "get_async_db_context",
    "get_async_engine",
    "IUnitOfWork",
    "SQLAlchemyUnitOfWork",
]
