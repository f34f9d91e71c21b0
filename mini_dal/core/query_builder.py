"""SQL statement builders for select, insert, update, and delete.

This module centralizes SQL string compilation from table names, field
mappings, ordering and limits. It keeps `DataAccess` focused on orchestration
while making statement generation pure and easy to test. Identifiers are
checked against an `IdentifierPolicy` and rendered unquoted; values only ever
appear as named markers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .conditions import OrderingInput, normalize_ordering
from .identifiers import DEFAULT_POLICY, IdentifierPolicy
from .placeholders import assignment_placeholders, scoped_marker_names, value_placeholders
from .types import ColumnsInput, FieldMapping, NamedParams


@dataclass(frozen=True)
class CompiledStatement:
    """Statement text with the named bind set that belongs to it."""

    sql: str
    params: NamedParams = field(default_factory=dict)


def compile_where(
    where: Optional[FieldMapping], policy: IdentifierPolicy = DEFAULT_POLICY
) -> str:
    """Compile a condition mapping into a ` WHERE a = :a AND ...` fragment.

    Returns an empty string when `where` is `None` or empty.
    """

    if not where:
        return ""
    _check_fields(where, policy)
    return f" WHERE {' AND '.join(assignment_placeholders(where))}"


def compile_order_by(
    order_by: OrderingInput, policy: IdentifierPolicy = DEFAULT_POLICY
) -> str:
    """Compile an ` ORDER BY col DIR, ...` fragment, or an empty string."""

    items = normalize_ordering(order_by)
    if not items:
        return ""
    ordered_cols = ", ".join(
        f"{policy.column(item.col)} {item.direction.value}" for item in items
    )
    return f" ORDER BY {ordered_cols}"


def compile_limit(limit: Optional[int]) -> str:
    """Compile a literal ` LIMIT n` fragment.

    Raises:
        ValueError: If `limit` is not a non-negative integer.
    """

    if limit is None:
        return ""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
    return f" LIMIT {limit}"


def build_select(
    table: str,
    columns: ColumnsInput,
    where: Optional[FieldMapping] = None,
    order_by: OrderingInput = None,
    limit: Optional[int] = None,
    *,
    policy: IdentifierPolicy = DEFAULT_POLICY,
) -> CompiledStatement:
    """Build `SELECT <columns> FROM <table>` with optional modifiers.

    Args:
        table: Table name.
        columns: `"*"`, a comma-separated string, or a sequence of names.
        where: Optional condition mapping, combined with `AND`.
        order_by: Optional ordering (see `normalize_ordering`).
        limit: Optional maximum row count.
        policy: Identifier policy applied to every name.

    Returns:
        Compiled statement whose params are the condition values.
    """

    projection = ", ".join(policy.projection(columns))
    sql = f"SELECT {projection} FROM {policy.table(table)}"
    sql += compile_where(where, policy)
    sql += compile_order_by(order_by, policy)
    sql += compile_limit(limit)
    return CompiledStatement(sql, dict(where or {}))


def build_count(
    table: str,
    where: Optional[FieldMapping] = None,
    *,
    policy: IdentifierPolicy = DEFAULT_POLICY,
) -> CompiledStatement:
    """Build `SELECT COUNT(*) AS row_count FROM <table>` with optional conditions."""

    sql = f"SELECT COUNT(*) AS row_count FROM {policy.table(table)}"
    sql += compile_where(where, policy)
    return CompiledStatement(sql, dict(where or {}))


def build_insert(
    table: str,
    data: FieldMapping,
    *,
    policy: IdentifierPolicy = DEFAULT_POLICY,
) -> CompiledStatement:
    """Build `INSERT INTO <table>(k1, k2) VALUES (:k1, :k2)`."""

    if not data:
        raise ValueError("Cannot INSERT without data.")
    _check_fields(data, policy)
    keys = ", ".join(data)
    values = ", ".join(value_placeholders(data))
    return CompiledStatement(
        f"INSERT INTO {policy.table(table)}({keys}) VALUES ({values})",
        dict(data),
    )


def build_update(
    table: str,
    data: FieldMapping,
    where: FieldMapping,
    *,
    policy: IdentifierPolicy = DEFAULT_POLICY,
) -> CompiledStatement:
    """Build `UPDATE <table> SET ... WHERE ...`.

    SET and WHERE bind independently: a condition field that is also a data
    field gets its own marker (`name__where`), so neither value is lost.
    """

    if not data:
        raise ValueError("Cannot UPDATE without data.")
    if not where:
        raise ValueError("Cannot UPDATE without conditions.")
    _check_fields(data, policy)
    _check_fields(where, policy)

    renames = scoped_marker_names(where, data)
    set_clause = ", ".join(assignment_placeholders(data))
    where_clause = " AND ".join(assignment_placeholders(where, marker_names=renames))

    params: NamedParams = dict(data)
    for name, value in where.items():
        params[renames.get(name, name)] = value

    return CompiledStatement(
        f"UPDATE {policy.table(table)} SET {set_clause} WHERE {where_clause}",
        params,
    )


def build_delete(
    table: str,
    where: FieldMapping,
    *,
    policy: IdentifierPolicy = DEFAULT_POLICY,
) -> CompiledStatement:
    """Build `DELETE FROM <table> WHERE ...`."""

    if not where:
        raise ValueError("Cannot DELETE without conditions.")
    sql = f"DELETE FROM {policy.table(table)}{compile_where(where, policy)}"
    return CompiledStatement(sql, dict(where))


def _check_fields(fields: FieldMapping, policy: IdentifierPolicy) -> None:
    for name in fields:
        policy.field(name)
