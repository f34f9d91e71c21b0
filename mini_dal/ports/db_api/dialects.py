"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Tuple

from ...core.errors import BindError, DriverError
from ...core.types import DriverParams

_MARKER = r"|(?<![:\w]):([A-Za-z_][A-Za-z0-9_]*)"

# String literals, quoted identifiers, or a `:name` marker (not `::cast`).
_TOKEN_RE = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|`[^`]*`" + _MARKER
)

# Same, for backends where a backslash escapes the next character in a literal.
_BACKSLASH_TOKEN_RE = re.compile(
    r"'(?:[^'\\]|\\.|'')*'"
    r'|"(?:[^"\\]|\\.|"")*"'
    r"|`[^`]*`" + _MARKER,
    re.DOTALL,
)


class Dialect:
    """Base dialect that defines placeholder rendering and insert-id lookup."""

    name: str = "generic"
    paramstyle: str = "named"
    backslash_escapes: bool = False

    def placeholder(self, key: str) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "named":
            return f":{key}"
        if self.paramstyle == "pyformat":
            return f"%({key})s"
        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def render(self, sql: str, values: Mapping[str, Any]) -> Tuple[str, DriverParams]:
        """Rewrite `:name` markers into this dialect's paramstyle.

        Markers inside string literals and quoted identifiers are left alone.

        Args:
            sql: Statement text using `:name` markers.
            values: Bound values keyed by marker name.

        Returns:
            Driver SQL and params (`dict` for named styles, ordered `list`
            for positional styles, `None` when the text has no markers).

        Raises:
            BindError: If a marker in the text has no bound value, or a bound
                value has no marker outside literals.
        """

        token_re = _BACKSLASH_TOKEN_RE if self.backslash_escapes else _TOKEN_RE
        positional = self.paramstyle in ("qmark", "format")
        # Drivers using %-formatting need literal `%` doubled.
        escape = self.paramstyle in ("format", "pyformat")
        parts: List[str] = []
        ordered: List[Any] = []
        named: dict[str, Any] = {}
        pos = 0

        def text(chunk: str) -> str:
            return chunk.replace("%", "%%") if escape else chunk

        rendered: set[str] = set()

        for match in token_re.finditer(sql):
            parts.append(text(sql[pos : match.start()]))
            pos = match.end()
            key = match.group(1)
            if key is None:
                parts.append(text(match.group(0)))
                continue
            if key not in values:
                raise BindError(f"No value bound for ':{key}'.", sql=sql)
            rendered.add(key)
            parts.append(self.placeholder(key))
            if positional:
                ordered.append(values[key])
            else:
                named[key] = values[key]
        parts.append(text(sql[pos:]))

        unused = [key for key in values if key not in rendered]
        if unused:
            raise BindError(
                f"Statement has no marker named ':{unused[0]}' outside literals.",
                sql=sql,
            )
        if not ordered and not named:
            return sql, None
        return "".join(parts), (ordered if positional else named)

    def last_insert_id(self, conn: Any, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)


class SQLiteDialect(Dialect):
    """SQLite dialect (`:name` parameters)."""

    name = "sqlite"
    paramstyle = "named"


class MySQLDialect(Dialect):
    """MySQL dialect (`%(name)s` parameters, `lastrowid` insert ids).

    Backslashes escape characters in MySQL string literals by default.
    """

    name = "mysql"
    paramstyle = "pyformat"
    backslash_escapes = True


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%(name)s` parameters, `lastval()` insert ids)."""

    name = "postgres"
    paramstyle = "pyformat"

    def last_insert_id(self, conn: Any, cursor: Any) -> Optional[int]:
        cur = conn.cursor()
        try:
            cur.execute("SELECT lastval()")
            row = cur.fetchone()
        except Exception as exc:
            raise DriverError(str(exc), sql="SELECT lastval()") from exc
        finally:
            close = getattr(cur, "close", None)
            if callable(close):
                close()
        if row is None:
            return None
        value = row[0] if isinstance(row, (tuple, list)) else next(iter(dict(row).values()))
        return int(value) if value is not None else None
