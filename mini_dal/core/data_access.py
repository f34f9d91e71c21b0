"""Data access facade composing builders, binder, and executor.

Every operation runs the same pipeline: build the statement text, prepare
it on the driver, bind the named values, execute, then interpret the
result. A failure at any stage raises a `DalError` subclass and the
statement handle is closed before the error leaves the operation.
"""

from __future__ import annotations

import contextlib
from typing import Any, Iterator, Optional, Union

from .binder import bind_params
from .conditions import OrderingInput
from .contracts import DriverPort, StatementPort
from .errors import NOT_FOUND, CardinalityError, DalError, DriverError, NotFound
from .executor import execute_statement, prepare_statement
from .identifiers import DEFAULT_POLICY, IdentifierPolicy
from .query_builder import (
    CompiledStatement,
    build_count,
    build_delete,
    build_insert,
    build_select,
    build_update,
)
from .types import ColumnsInput, FieldMapping, Record, Records


class DataAccess:
    """Public operation set over one owned driver connection.

    Not thread-safe: one instance must not run two operations at once.

    Args:
        driver: Driver adapter owning the connection (for example
            `mini_dal.ports.db_api.DbApiDriver`).
        policy: Identifier policy applied to every table and column name.
    """

    def __init__(self, driver: DriverPort, *, policy: IdentifierPolicy = DEFAULT_POLICY):
        self.driver = driver
        self.policy = policy

    def get_value(
        self, table: str, column: str, where: Optional[FieldMapping]
    ) -> Union[Any, NotFound]:
        """Return one column value from the single row matching `where`.

        Returns:
            The scalar value, or `NOT_FOUND` when no row matched.

        Raises:
            CardinalityError: If more than one row matched.
        """

        self.policy.column(column)
        compiled = build_select(table, [column], where, policy=self.policy)
        row = self._fetch_single("get_value", compiled)
        if row is NOT_FOUND:
            return NOT_FOUND
        return next(iter(row.values()))

    def get_row(
        self, table: str, columns: ColumnsInput, where: Optional[FieldMapping]
    ) -> Union[Record, NotFound]:
        """Return the single row matching `where`, or `NOT_FOUND`.

        Raises:
            CardinalityError: If more than one row matched.
        """

        compiled = build_select(table, columns, where, policy=self.policy)
        return self._fetch_single("get_row", compiled)

    def select(
        self,
        table: str,
        columns: ColumnsInput,
        where: Optional[FieldMapping] = None,
        order_by: OrderingInput = None,
        limit: Optional[int] = None,
    ) -> Records:
        """Return every row matching the optional conditions."""

        compiled = build_select(
            table, columns, where, order_by, limit, policy=self.policy
        )
        with self._run(compiled) as statement:
            return list(_iter_rows(statement))

    def count(self, table: str, where: Optional[FieldMapping] = None) -> int:
        """Return the number of rows matching the optional conditions."""

        compiled = build_count(table, where, policy=self.policy)
        with self._run(compiled) as statement:
            row = statement.fetch_row()
        return int(row["row_count"]) if row is not None else 0

    def exists(self, table: str, where: Optional[FieldMapping]) -> bool:
        """Return whether at least one row matches `where`."""

        compiled = build_select(table, "*", where, limit=1, policy=self.policy)
        with self._run(compiled) as statement:
            return statement.fetch_row() is not None

    def query(self, sql: str, params: Optional[FieldMapping] = None) -> StatementPort:
        """Execute caller-supplied statement text with optional named params.

        The text is not validated; only `params` are bound. The executed
        statement is returned open and the caller must close it.
        """

        statement = prepare_statement(self.driver, sql)
        try:
            bind_params(statement, params)
            return execute_statement(statement)
        except BaseException:
            statement.close()
            raise

    def insert(self, table: str, data: FieldMapping) -> Optional[int]:
        """Insert one row and return the driver-generated row identifier."""

        compiled = build_insert(table, data, policy=self.policy)
        with self._run(compiled) as statement:
            return self.driver.last_insert_id(statement)

    def update(self, table: str, data: FieldMapping, where: FieldMapping) -> int:
        """Update matching rows and return the affected-row count."""

        compiled = build_update(table, data, where, policy=self.policy)
        with self._run(compiled) as statement:
            return statement.row_count()

    def delete(self, table: str, where: FieldMapping) -> int:
        """Delete matching rows and return the affected-row count."""

        compiled = build_delete(table, where, policy=self.policy)
        with self._run(compiled) as statement:
            return statement.row_count()

    def close(self) -> None:
        """Close the owned driver connection."""

        self.driver.close()

    def __enter__(self) -> DataAccess:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    @contextlib.contextmanager
    def _run(self, compiled: CompiledStatement) -> Iterator[StatementPort]:
        statement = prepare_statement(self.driver, compiled.sql)
        with contextlib.closing(statement):
            bind_params(statement, compiled.params)
            executed = execute_statement(statement)
            # Result reads (rows, counts, insert ids) fail like execution does.
            try:
                yield executed
            except DalError:
                raise
            except Exception as exc:
                raise DriverError(str(exc), sql=compiled.sql) from exc

    def _fetch_single(
        self, operation: str, compiled: CompiledStatement
    ) -> Union[Record, NotFound]:
        with self._run(compiled) as statement:
            rows = list(_iter_rows(statement))
        if len(rows) > 1:
            raise CardinalityError(f"DataAccess.{operation}", len(rows))
        if not rows:
            return NOT_FOUND
        return rows[0]


def _iter_rows(statement: StatementPort) -> Iterator[Record]:
    while True:
        row = statement.fetch_row()
        if row is None:
            return
        yield row
