"""
Field-level change detection between stored and imported records.

Both sides are canonical records of the same type, so the set of compared
fields comes from the record schema rather than from whatever keys a JSON
blob happens to carry.
"""

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any

from racevault.models.assets import AssetRecord

# Bookkeeping fields never reported as changes
IGNORED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality for JSON-like values.

    Mappings must have the same keys, sequences the same elements in the
    same order. Booleans never equal numbers; ints and floats compare by value.
    """
    if a is None or b is None:
        return a is b

    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    if isinstance(a, int | float) and isinstance(b, int | float):
        return a == b

    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)

    if isinstance(a, Sequence) and isinstance(b, Sequence):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b, strict=True))

    if type(a) is not type(b):
        return False
    return bool(a == b)


def detect_changes(existing: AssetRecord, incoming: AssetRecord) -> list[str]:
    """
    List the fields of `incoming` whose values differ from `existing`.

    Fields are reported in the record's declaration order.

    Raises:
        TypeError: If the two records are not of the same type.
    """
    if type(existing) is not type(incoming):
        msg = (
            f"Cannot compare {type(existing).__name__} with {type(incoming).__name__}"
        )
        raise TypeError(msg)

    changes: list[str] = []
    for record_field in dataclasses.fields(incoming):
        name = record_field.name
        if name in IGNORED_FIELDS:
            continue
        if not deep_equal(getattr(existing, name), getattr(incoming, name)):
            changes.append(name)
    return changes
