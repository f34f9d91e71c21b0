"""Ordering primitives for select statements."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union


class SortDirection(str, Enum):
    """Sort direction of one ordering expression."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: Union[SortDirection, str]) -> SortDirection:
        """Parse a direction, accepting `asc`/`desc` in any case."""

        if isinstance(value, SortDirection):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"Unsupported sort direction: {value!r}")


@dataclass(frozen=True)
class OrderBy:
    """Represents one ordering expression."""

    col: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", SortDirection.parse(self.direction))

    @classmethod
    def asc(cls, col: str) -> OrderBy:
        return cls(col, SortDirection.ASC)

    @classmethod
    def desc(cls, col: str) -> OrderBy:
        return cls(col, SortDirection.DESC)


OrderingInput = Optional[
    Union[
        Mapping[str, Union[SortDirection, str]],
        Sequence[Union[OrderBy, str, Tuple[str, Union[SortDirection, str]]]],
    ]
]


def normalize_ordering(order_by: OrderingInput) -> List[OrderBy]:
    """Normalize ordering input into a list of `OrderBy` items.

    Accepts a sequence of `OrderBy`, `(column, direction)` pairs, or bare
    column names (ascending), or a mapping of column name to direction.
    """

    if not order_by:
        return []
    if isinstance(order_by, Mapping):
        return [OrderBy(col, direction) for col, direction in order_by.items()]
    if isinstance(order_by, (str, OrderBy)):
        order_by = [order_by]

    items: List[OrderBy] = []
    for item in order_by:
        if isinstance(item, OrderBy):
            items.append(item)
        elif isinstance(item, str):
            items.append(OrderBy(item))
        elif isinstance(item, tuple) and len(item) == 2:
            items.append(OrderBy(item[0], item[1]))
        else:
            raise TypeError(
                "Ordering items must be OrderBy, column names, or (column, direction) pairs."
            )
    return items
