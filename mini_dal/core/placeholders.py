"""Named bind marker generation for assignment and value clauses."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .types import FieldMapping


def marker(name: str) -> str:
    """Return the named bind marker for `name` (`:name`)."""

    return f":{name}"


def assignment_placeholders(
    fields: FieldMapping,
    *,
    marker_names: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Build `name = :name` entries in field order.

    Args:
        fields: Field mapping; only its keys are used.
        marker_names: Optional field-to-marker renames, used to keep
            clauses that share field names in separate marker namespaces.

    Returns:
        One assignment entry per field.
    """

    renames = marker_names or {}
    return [f"{name} = {marker(renames.get(name, name))}" for name in fields]


def value_placeholders(fields: FieldMapping) -> List[str]:
    """Build `:name` entries in field order for `VALUES (...)` lists."""

    return [marker(name) for name in fields]


def scoped_marker_names(
    names: Iterable[str], taken: Iterable[str], *, suffix: str = "__where"
) -> dict[str, str]:
    """Map each of `names` that collides with `taken` to a fresh marker name.

    Colliding names get `suffix` appended (repeatedly, until unused).
    Non-colliding names are left out of the result.
    """

    taken_names = set(taken)
    names = list(names)
    used = taken_names | set(names)
    renames: dict[str, str] = {}
    for name in names:
        if name not in taken_names:
            continue
        candidate = f"{name}{suffix}"
        while candidate in used:
            candidate += suffix
        used.add(candidate)
        renames[name] = candidate
    return renames
