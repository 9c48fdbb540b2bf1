from __future__ import annotations

import copy
import json
import re
from typing import Any, Sequence, Union

from .errors import ArrayAutoCreateRefusedError, PathTraversalError, PathValidationError

Key = Union[str, int]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_MISSING = object()


def _is_index(key: object) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _is_container(value: object) -> bool:
    return isinstance(value, (dict, list))


def validate_keys(keys: Sequence[object]) -> None:
    """
    Every key must be a non-empty string or an integer index.

    Raises PathValidationError naming the first offending position and its type.
    """
    if isinstance(keys, (str, bytes)):
        raise PathValidationError("Path must be a sequence of keys, not a single string")
    if len(keys) == 0:
        raise PathValidationError("Path must contain at least one key")
    for i, key in enumerate(keys):
        if isinstance(key, str):
            if key == "":
                raise PathValidationError(f"Key at index {i} must be a non-empty string or an integer, got empty string")
            continue
        if _is_index(key):
            continue
        raise PathValidationError(
            f"Key at index {i} must be a non-empty string or an integer, got {type(key).__name__}"
        )


def format_path(keys: Sequence[Key]) -> str:
    """
    Render keys the way nested properties are usually displayed.

    >>> format_path(["items", 0, "name"])
    'items[0].name'
    >>> format_path(["a b", "c"])
    '["a b"].c'
    """
    parts: list[str] = []
    for key in keys:
        if isinstance(key, str) and _IDENTIFIER_RE.match(key):
            parts.append(f".{key}" if parts else key)
        elif _is_index(key):
            parts.append(f"[{key}]")
        else:
            parts.append(f"[{json.dumps(key)}]")
    return "".join(parts)


def _child(container: Any, key: Key) -> Any:
    if isinstance(container, dict):
        return container.get(str(key) if _is_index(key) else key, _MISSING)
    if isinstance(container, list) and _is_index(key):
        if 0 <= key < len(container):
            return container[key]
    return _MISSING


def _assign(container: Any, key: Key, value: Any, keys: Sequence[Key], depth: int) -> None:
    if isinstance(container, dict):
        container[str(key) if _is_index(key) else key] = value
        return
    if not _is_index(key):
        raise PathTraversalError(
            f"Cannot use key {key!r} on a list at {format_path(keys[: depth + 1])}"
        )
    if 0 <= key < len(container):
        container[key] = value
    elif key == len(container):
        container.append(value)
    else:
        raise PathTraversalError(
            f"Index {key} out of range for list of length {len(container)} at {format_path(keys[: depth + 1])}"
        )


def _lookup(document: Any, keys: Sequence[Key]) -> Any:
    current = document
    for key in keys:
        if not _is_container(current):
            return _MISSING
        current = _child(current, key)
        if current is _MISSING:
            return _MISSING
    return current


def get_path(document: Any, keys: Sequence[Key], default: Any = None) -> Any:
    """
    Return a copy of the value at keys, or default when any step is missing
    or not a container. Never raises for a missing location.
    """
    validate_keys(keys)
    found = _lookup(document, keys)
    if found is _MISSING:
        return default
    return copy.deepcopy(found)


def has_path(document: Any, keys: Sequence[Key]) -> bool:
    validate_keys(keys)
    return _lookup(document, keys) is not _MISSING


def set_at_path(document: Any, keys: Sequence[Key], value: Any) -> None:
    """
    Set value at keys, mutating document in place.

    Missing intermediate containers (or null ones) become empty dicts. A list
    is never created implicitly: if the key after a missing container is an
    integer, ArrayAutoCreateRefusedError is raised and the caller has to
    initialize the list first.
    """
    validate_keys(keys)
    if not _is_container(document):
        raise PathTraversalError(f"Cannot traverse into {type(document).__name__} at document root")

    current = document
    for depth, key in enumerate(keys[:-1]):
        next_key = keys[depth + 1]
        child = _child(current, key)
        if child is _MISSING or child is None:
            if _is_index(next_key):
                prefix = list(keys[: depth + 1])
                raise ArrayAutoCreateRefusedError(
                    f"Refusing to create a list at {format_path(prefix)} for index {next_key} in "
                    f"{format_path(keys)}; initialize it first, e.g. set_path({prefix!r}, [])"
                )
            child = {}
            _assign(current, key, child, keys, depth)
        elif not _is_container(child):
            raise PathTraversalError(
                f"Cannot traverse through {type(child).__name__} at {format_path(keys[: depth + 1])} "
                f"while setting {format_path(keys)}"
            )
        current = child

    _assign(current, keys[-1], value, keys, len(keys) - 1)
