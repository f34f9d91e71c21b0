"""DB-API adapter implementation for the core driver port."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ...core.errors import DriverError
from ...core.types import MaybeRecord, Record
from ...core.values import BoundValue
from .dialects import Dialect

logger = logging.getLogger(__name__)


class DbApiStatement:
    """Prepared statement emulated on top of a DB-API cursor.

    Values are collected by `bind()` and sent with the rendered SQL on
    `execute()`; the cursor lives until `close()`.
    """

    def __init__(self, driver: DbApiDriver, sql: str):
        self.driver = driver
        self.sql = sql
        self.bound: dict[str, BoundValue] = {}
        self.cursor: Any | None = None
        self._closed = False

    def bind(self, name: str, value: BoundValue) -> None:
        if self._closed:
            raise DriverError("statement is closed", sql=self.sql)
        self.bound[name] = value

    def execute(self) -> None:
        if self._closed:
            raise DriverError("statement is closed", sql=self.sql)
        conn = self.driver._require_open_connection()
        sql, params = self.driver.dialect.render(
            self.sql, {name: value.value for name, value in self.bound.items()}
        )
        logger.debug("execute: %s", sql)
        if self.cursor is None:
            self.cursor = conn.cursor()
        if params is None:
            self.cursor.execute(sql)
        else:
            self.cursor.execute(sql, params)

    def row_count(self) -> int:
        cursor = self._require_cursor()
        try:
            return int(getattr(cursor, "rowcount", -1))
        except Exception as exc:
            raise DriverError(str(exc), sql=self.sql) from exc

    def fetch_row(self) -> MaybeRecord:
        cursor = self._require_cursor()
        try:
            if getattr(cursor, "description", None) is None:
                return None
            row = cursor.fetchone()
        except Exception as exc:
            raise DriverError(str(exc), sql=self.sql) from exc
        if row is None:
            return None
        return Record(_row_to_mapping(cursor, row))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        cursor, self.cursor = self.cursor, None
        close = getattr(cursor, "close", None)
        if callable(close):
            close()

    def _require_cursor(self) -> Any:
        if self.cursor is None:
            raise DriverError("statement has not been executed", sql=self.sql)
        return self.cursor

    def __enter__(self) -> DbApiStatement:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


class DbApiDriver:
    """Thin DB-API wrapper exposing prepare/bind/execute statements."""

    def __init__(self, conn: Any, dialect: Dialect):
        """Create driver adapter.

        Args:
            conn: DB-API connection object. The driver owns it and closes it
                on `close()`.
            dialect: Concrete SQL dialect instance.
        """

        self.conn: Any | None = conn
        self.dialect = dialect
        self._closed = False

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise DriverError("connection is closed")
        return self.conn

    def prepare(self, sql: str) -> DbApiStatement:
        self._require_open_connection()
        return DbApiStatement(self, sql)

    def last_insert_id(self, statement: DbApiStatement) -> Optional[int]:
        conn = self._require_open_connection()
        try:
            return self.dialect.last_insert_id(conn, statement.cursor)
        except DriverError:
            raise
        except Exception as exc:
            raise DriverError(str(exc), sql=statement.sql) from exc

    def close(self) -> None:
        """Close the underlying connection. Safe to call more than once."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> DbApiDriver:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _row_to_mapping(cursor: Any, row: Any) -> Mapping[str, Any]:
    """Normalize row object to mapping.

    Supports mapping rows directly and tuple/list rows via
    `cursor.description`.
    """

    if isinstance(row, Mapping):
        return row

    if isinstance(row, (tuple, list)):
        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError("Cursor has no description; cannot map tuple rows to dict.")
        cols = [d[0] for d in desc]
        return dict(zip(cols, row))

    keys = getattr(row, "keys", None)
    if callable(keys):
        return {key: row[key] for key in keys()}

    raise TypeError(f"Unsupported row type: {type(row)}")
