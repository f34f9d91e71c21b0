"""Prepare and execute statements, translating driver failures into `DriverError`."""

from __future__ import annotations

from .contracts import DriverPort, StatementPort
from .errors import DalError, DriverError


def prepare_statement(driver: DriverPort, sql: str) -> StatementPort:
    """Prepare `sql` on `driver`.

    Raises:
        DriverError: If the driver fails to prepare the statement.
    """

    try:
        return driver.prepare(sql)
    except DalError:
        raise
    except Exception as exc:
        raise DriverError(str(exc), sql=sql) from exc


def execute_statement(statement: StatementPort) -> StatementPort:
    """Execute a bound statement and return it for result reading.

    Failures are not retried.

    Raises:
        DriverError: Carrying the driver message for any driver failure.
    """

    try:
        statement.execute()
    except DalError:
        raise
    except Exception as exc:
        raise DriverError(str(exc), sql=statement.sql) from exc
    return statement
