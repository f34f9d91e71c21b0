"""Shared core type aliases used across contracts, builders, and ports."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

FieldMapping = Mapping[str, Any]
NamedParams = Dict[str, Any]
PositionalParams = List[Any]
DriverParams = Union[NamedParams, PositionalParams, None]

ColumnsInput = Union[str, Sequence[str]]


class Record(Mapping[str, Any]):
    """Read-only row record keyed by selected column name.

    Values are readable by key (`row["name"]`) and by attribute
    (`row.name`) for columns whose name is a valid Python identifier.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any]):
        object.__setattr__(self, "_data", dict(data))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_data":
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Record is read-only")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Record({self._data!r})"


MaybeRecord = Optional[Record]
Records = List[Record]
