"""
Small helpers for reshaping plain records during a migration.

remove_keys, rename_key and add_defaults mutate in place; pick and omit
return new dicts and leave the source untouched.
"""
from __future__ import annotations

from typing import Any, Mapping, MutableMapping


def remove_keys(obj: MutableMapping[str, Any], *keys: str) -> None:
    for key in keys:
        obj.pop(key, None)


def rename_key(obj: MutableMapping[str, Any], old_key: str, new_key: str) -> None:
    """
    Move obj[old_key] to obj[new_key], overwriting new_key if present.
    No-op when old_key is missing or equal to new_key.
    """
    if old_key == new_key or old_key not in obj:
        return
    obj[new_key] = obj.pop(old_key)


def add_defaults(obj: MutableMapping[str, Any], defaults: Mapping[str, Any]) -> None:
    # Existing keys win, even when their value is None.
    for key, value in defaults.items():
        if key not in obj:
            obj[key] = value


def pick(obj: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    return {key: obj[key] for key in keys if key in obj}


def omit(obj: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    excluded = set(keys)
    return {key: value for key, value in obj.items() if key not in excluded}
