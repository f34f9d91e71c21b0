"""Public port exports for concrete adapter implementations."""

from .db_api import (
    ConnectionConfig,
    DbApiDriver,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    open_driver,
)

__all__ = [
    "ConnectionConfig",
    "DbApiDriver",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "open_driver",
]
