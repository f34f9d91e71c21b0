"""Tagged bind values passed from the binder to driver statements."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Storage class of a bound value."""

    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BLOB = "blob"
    NULL = "null"


@dataclass(frozen=True)
class BoundValue:
    """One value tagged with its storage class.

    Attributes:
        kind: Storage class chosen for the value.
        value: Python value handed to the driver (`int`, `float`, `str`,
            `bytes` or `None`).
    """

    kind: ValueKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> BoundValue:
        """Tag a plain Python value.

        Raises:
            TypeError: If the value has no supported storage class.
        """

        if isinstance(value, BoundValue):
            return value
        if value is None:
            return cls(ValueKind.NULL, None)
        if isinstance(value, Enum):
            return cls.of(value.value)
        # bool is an int subclass; store it as 0/1.
        if isinstance(value, bool):
            return cls(ValueKind.INTEGER, int(value))
        if isinstance(value, int):
            return cls(ValueKind.INTEGER, value)
        if isinstance(value, float):
            return cls(ValueKind.REAL, value)
        if isinstance(value, str):
            return cls(ValueKind.TEXT, value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(ValueKind.BLOB, bytes(value))
        if isinstance(value, Decimal):
            return cls(ValueKind.TEXT, str(value))
        if isinstance(value, (datetime, date, time)):
            return cls(ValueKind.TEXT, value.isoformat())
        raise TypeError(f"Unsupported bind value type: {type(value).__name__}")

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL
