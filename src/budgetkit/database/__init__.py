"""Database layer for budgetkit application."""

from budgetkit.database.base import Database, PropertyStore
from budgetkit.database.factories import create_sqlite_database
from budgetkit.database.memory import InMemoryPropertyStore

__all__ = ["Database", "PropertyStore", "InMemoryPropertyStore", "create_sqlite_database"]
