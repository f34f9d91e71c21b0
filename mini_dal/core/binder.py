"""Bind named values onto prepared statements."""

from __future__ import annotations

import re
from typing import Optional

from .contracts import StatementPort
from .errors import BindError, DriverError
from .types import FieldMapping
from .values import BoundValue


def has_marker(sql: str, name: str) -> bool:
    """Return whether `sql` contains the named marker `:name`."""

    pattern = rf"(?<![:\w]):{re.escape(name)}(?!\w)"
    return re.search(pattern, sql) is not None


def bind_params(
    statement: StatementPort, params: Optional[FieldMapping]
) -> StatementPort:
    """Bind each value in `params` to its named marker and return the statement.

    Values are bound in mapping order as `BoundValue`s.

    Raises:
        BindError: If a marker is missing from the statement text, a value
            has no storage class, or the driver rejects the binding.
    """

    if not params:
        return statement

    for name, value in params.items():
        if not has_marker(statement.sql, name):
            raise BindError(
                f"Statement has no marker named ':{name}'.", sql=statement.sql
            )
        try:
            bound = BoundValue.of(value)
        except TypeError as exc:
            raise BindError(f"Cannot bind ':{name}': {exc}", sql=statement.sql) from exc
        try:
            statement.bind(name, bound)
        except DriverError:
            raise
        except Exception as exc:
            raise BindError(str(exc), sql=statement.sql) from exc
    return statement
