from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence, Union

from .key_paths import Key

Document = dict[str, Any]
Mutator = Callable[[Document], None]
# A mapping is merged one level deep; a callable mutates a private copy.
Updater = Union[Mapping[str, Any], Mutator]


class PathDocumentStore(Protocol):
    """
    The slice of the store that path-addressed consumers need.
    """

    def get_path(self, *keys: Key, default: Any = None) -> Any:
        ...

    async def set_path_and_save(self, keys: Sequence[Key], value: Any) -> None:
        ...


class DocumentStore(PathDocumentStore, Protocol):
    """
    A single JSON document persisted at a fixed location.
    """

    @property
    def data(self) -> Document:
        """A deep copy of the current document."""
        ...

    @property
    def is_dirty(self) -> bool:
        ...

    @property
    def is_initialized(self) -> bool:
        ...

    async def load(self) -> "DocumentStore":
        ...

    async def reload(self) -> "DocumentStore":
        ...

    async def save(self) -> None:
        ...

    def update(self, updater: Updater) -> None:
        ...

    async def update_and_save(self, updater: Updater) -> None:
        ...

    def has_path(self, *keys: Key) -> bool:
        ...

    def set_path(self, keys: Sequence[Key], value: Any) -> None:
        ...
