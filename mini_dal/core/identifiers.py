"""Identifier grammar and allow-list checks for table and column names.

Identifiers are concatenated into statement text unquoted, so every table,
projection, field, and ordering name is checked here before any SQL is built.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import FrozenSet, List, Optional

from .errors import IdentifierError
from .types import ColumnsInput

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
_IDENTIFIER_RE = re.compile(rf"^{_IDENT}(?:\.{_IDENT})?$")


def is_identifier(name: object) -> bool:
    """Return whether `name` matches the plain or `table.column` grammar."""

    return isinstance(name, str) and _IDENTIFIER_RE.match(name) is not None


def _unqualified(name: str) -> str:
    return name.rsplit(".", 1)[-1]


class IdentifierPolicy:
    """Validates identifiers against the grammar and optional allow-lists.

    Args:
        allowed_tables: When set, only these table names are accepted.
        allowed_columns: When set, only these column names are accepted.
            Qualified names (`users.id`) are checked by their column part.
    """

    def __init__(
        self,
        *,
        allowed_tables: Optional[Iterable[str]] = None,
        allowed_columns: Optional[Iterable[str]] = None,
    ):
        self.allowed_tables: Optional[FrozenSet[str]] = (
            frozenset(allowed_tables) if allowed_tables is not None else None
        )
        self.allowed_columns: Optional[FrozenSet[str]] = (
            frozenset(allowed_columns) if allowed_columns is not None else None
        )

    def table(self, name: str) -> str:
        """Return `name` if it is an acceptable table identifier."""

        self._check_grammar(name, "table")
        if self.allowed_tables is not None and name not in self.allowed_tables:
            raise IdentifierError(f"Table {name!r} is not in the allow-list.")
        return name

    def column(self, name: str) -> str:
        """Return `name` if it is an acceptable column identifier."""

        self._check_grammar(name, "column")
        if (
            self.allowed_columns is not None
            and _unqualified(name) not in self.allowed_columns
        ):
            raise IdentifierError(f"Column {name!r} is not in the allow-list.")
        return name

    def field(self, name: str) -> str:
        """Return `name` if it can be both a column and a bind marker name."""

        self.column(name)
        if "." in name:
            raise IdentifierError(
                f"Field name {name!r} must not be qualified; it is also a marker name."
            )
        return name

    def columns(self, names: Iterable[str]) -> List[str]:
        return [self.column(name) for name in names]

    def projection(self, columns: ColumnsInput) -> List[str]:
        """Normalize a projection into a list of checked column names.

        Accepts `"*"`, a comma-separated string, or a sequence of names.
        """

        if isinstance(columns, str):
            items = [part.strip() for part in columns.split(",")]
        else:
            items = list(columns)
        if not items or any(item == "" for item in items):
            raise IdentifierError("Projection must name at least one column.")
        if items == ["*"]:
            return items
        return self.columns(items)

    def _check_grammar(self, name: object, kind: str) -> None:
        if not is_identifier(name):
            raise IdentifierError(f"Invalid {kind} identifier: {name!r}")


DEFAULT_POLICY = IdentifierPolicy()
