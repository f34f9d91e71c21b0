"""mini_dal: a small parameterized-SQL data access layer over DB-API drivers."""

import logging

from .core import (
    NOT_FOUND,
    BindError,
    BoundValue,
    CardinalityError,
    CompiledStatement,
    DalConnectionError,
    DalError,
    DataAccess,
    DriverError,
    IdentifierError,
    IdentifierPolicy,
    NotFound,
    OrderBy,
    Record,
    SortDirection,
    ValueKind,
    build_count,
    build_delete,
    build_insert,
    build_select,
    build_update,
)
from .ports import (
    ConnectionConfig,
    DbApiDriver,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    open_driver,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BindError",
    "BoundValue",
    "CardinalityError",
    "CompiledStatement",
    "ConnectionConfig",
    "DalConnectionError",
    "DalError",
    "DataAccess",
    "DbApiDriver",
    "Dialect",
    "DriverError",
    "IdentifierError",
    "IdentifierPolicy",
    "MySQLDialect",
    "NOT_FOUND",
    "NotFound",
    "OrderBy",
    "PostgresDialect",
    "Record",
    "SQLiteDialect",
    "SortDirection",
    "ValueKind",
    "build_count",
    "build_delete",
    "build_insert",
    "build_select",
    "build_update",
    "open_driver",
]
