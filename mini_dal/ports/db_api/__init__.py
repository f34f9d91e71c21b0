"""DB-API driver adapter, dialect, and connection exports."""

from .connection import ConnectionConfig, connect, load_driver_module, open_driver
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect
from .driver import DbApiDriver, DbApiStatement

__all__ = [
    "ConnectionConfig",
    "DbApiDriver",
    "DbApiStatement",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "connect",
    "load_driver_module",
    "open_driver",
]
