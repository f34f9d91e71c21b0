"""Error kinds raised by the data-access core."""

from __future__ import annotations

from typing import Optional


class DalError(Exception):
    """Base class for every failure reported by `mini_dal`."""


class DriverError(DalError):
    """Driver-reported failure (connectivity, syntax, constraint violation).

    Attributes:
        message: Message reported by the driver.
        sql: Statement text that was being prepared or executed, if known.
    """

    def __init__(self, message: str, *, sql: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.sql = sql


class BindError(DriverError):
    """Raised when a named value cannot be bound onto a statement."""


class CardinalityError(DalError):
    """Raised when a single-row fetch matched more than one row."""

    def __init__(self, operation: str, count: int):
        super().__init__(
            f"{operation} should return only one row, {count} rows returned"
        )
        self.operation = operation
        self.count = count


class IdentifierError(DalError, ValueError):
    """Raised when a table or column name is rejected by the identifier policy."""


class DalConnectionError(DalError, ConnectionError):
    """Raised when a database connection cannot be opened."""


class _NotFound:
    """Singleton marker for a single-row fetch that matched no row."""

    _instance: Optional[_NotFound] = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()
# Type of `NOT_FOUND`, for `isinstance` checks. Not an exception class.
NotFound = _NotFound
