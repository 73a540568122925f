"""Storage layer for users, sessions, quota usage and analyses."""

from .database import Database, get_db, init_database

__all__ = ["Database", "get_db", "init_database"]
