"""Core port contracts implemented by driver adapters."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Tuple

from .types import DriverParams, MaybeRecord
from .values import BoundValue


class DialectPort(Protocol):
    """Placeholder syntax and insert-id behavior of one SQL backend."""

    name: str
    paramstyle: str

    def render(self, sql: str, values: Mapping[str, Any]) -> Tuple[str, DriverParams]: ...

    def last_insert_id(self, conn: Any, cursor: Any) -> Optional[int]: ...


class StatementPort(Protocol):
    """Prepared statement handle owned by one operation."""

    sql: str

    def bind(self, name: str, value: BoundValue) -> None: ...

    def execute(self) -> None: ...

    def row_count(self) -> int: ...

    def fetch_row(self) -> MaybeRecord: ...

    def close(self) -> None: ...


class DriverPort(Protocol):
    """Database driver behavior required by `DataAccess`."""

    def prepare(self, sql: str) -> StatementPort: ...

    def last_insert_id(self, statement: StatementPort) -> Optional[int]: ...

    def close(self) -> None: ...
