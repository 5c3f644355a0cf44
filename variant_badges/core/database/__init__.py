"""
Database module for Variant Badges

Uses SQLAlchemy async for all database operations.
"""

from .engine import create_engine, get_database_url
from .session import Database, get_database

__all__ = [
    "create_engine",
    "get_database_url",
    "Database",
    "get_database",
]
