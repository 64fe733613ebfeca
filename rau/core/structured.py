"""Helpers for reading untyped JSON payloads.

API responses come back as `object`; these helpers narrow them at the
boundary so the rest of the code works with typed values.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value from a mapping.

    Returns None if missing, not a str, or empty.
    """
    value = table.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def get_id(table: Mapping[str, object], key: str) -> str | None:
    """Get an identifier that the API may send as either int or str."""
    value = table.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return None
