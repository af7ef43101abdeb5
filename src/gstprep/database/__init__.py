"""Database layer for gstprep."""

from gstprep.database.base import Database
from gstprep.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
