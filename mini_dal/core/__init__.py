"""Public core API for statement building, binding, and data access."""

from .binder import bind_params
from .conditions import OrderBy, SortDirection, normalize_ordering
from .contracts import DialectPort, DriverPort, StatementPort
from .data_access import DataAccess
from .errors import (
    NOT_FOUND,
    BindError,
    CardinalityError,
    DalConnectionError,
    DalError,
    DriverError,
    IdentifierError,
    NotFound,
)
from .executor import execute_statement, prepare_statement
from .identifiers import IdentifierPolicy, is_identifier
from .placeholders import assignment_placeholders, value_placeholders
from .query_builder import (
    CompiledStatement,
    build_count,
    build_delete,
    build_insert,
    build_select,
    build_update,
)
from .types import FieldMapping, Record
from .values import BoundValue, ValueKind

__all__ = [
    "BindError",
    "BoundValue",
    "CardinalityError",
    "CompiledStatement",
    "DalConnectionError",
    "DalError",
    "DataAccess",
    "DialectPort",
    "DriverError",
    "DriverPort",
    "FieldMapping",
    "IdentifierError",
    "IdentifierPolicy",
    "NOT_FOUND",
    "NotFound",
    "OrderBy",
    "Record",
    "SortDirection",
    "StatementPort",
    "ValueKind",
    "assignment_placeholders",
    "bind_params",
    "build_count",
    "build_delete",
    "build_insert",
    "build_select",
    "build_update",
    "execute_statement",
    "is_identifier",
    "normalize_ordering",
    "prepare_statement",
    "value_placeholders",
]
