from __future__ import annotations

from typing import Iterable

from persistence.interfaces import PathDocumentStore

DEFAULT_SCOPED_TYPES = frozenset({"inventories", "credentials"})


class DependencyNotFoundError(LookupError):
    def __init__(self, type_: str, old_id: str, environment: str, category: str):
        self.type = type_
        self.old_id = old_id
        self.environment = environment
        self.category = category
        super().__init__(
            f'Dependency not found: {type_} "{old_id}" for environment "{environment}" '
            f'and category "{category}" must be migrated first'
        )


def _require_non_empty(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TypeError(f"{name} must be a non-empty string")
    return value


class DependencyResolver:
    """
    Maps source-system IDs to target-system IDs through an id-map store.

    Simple types are stored as  {type: {old_id: new_id}}.
    Scoped types are stored as  {type: {old_id: {category: {environment: new_id}}}}
    so the same source object can map to different targets per environment.
    Lookups for scoped types fall back to the simple layout, which keeps
    maps written before a type became scoped readable.
    """

    def __init__(
        self,
        id_map: PathDocumentStore,
        environment: str,
        category: str,
        *,
        scoped_types: Iterable[str] | None = None,
    ):
        self._id_map = id_map
        self._environment = environment
        self._category = category
        self._scoped_types = frozenset(scoped_types) if scoped_types is not None else DEFAULT_SCOPED_TYPES

    @property
    def environment(self) -> str:
        return self._environment

    @property
    def category(self) -> str:
        return self._category

    def _is_scoped(self, type_: str) -> bool:
        return type_ in self._scoped_types

    def _resolve(self, type_: str, old_id: str) -> str | None:
        if self._is_scoped(type_):
            scoped = self._id_map.get_path(type_, old_id, self._category, self._environment)
            if isinstance(scoped, str):
                return scoped

        simple = self._id_map.get_path(type_, old_id)
        if isinstance(simple, str):
            return simple
        return None

    def require(self, type_: str, old_id: str) -> str:
        """Return the new ID for a mandatory dependency, or raise DependencyNotFoundError."""
        _require_non_empty(type_, "type")
        _require_non_empty(old_id, "old_id")

        new_id = self._resolve(type_, old_id)
        if new_id is None:
            raise DependencyNotFoundError(type_, old_id, self._environment, self._category)
        return new_id

    def optional(self, type_: str, old_id: str | None) -> str | None:
        _require_non_empty(type_, "type")
        if not isinstance(old_id, str) or not old_id.strip():
            return None
        return self._resolve(type_, old_id)

    def has(self, type_: str, old_id: str) -> bool:
        _require_non_empty(type_, "type")
        _require_non_empty(old_id, "old_id")
        return self._resolve(type_, old_id) is not None

    async def record(self, type_: str, old_id: str, new_id: str) -> None:
        _require_non_empty(type_, "type")
        _require_non_empty(old_id, "old_id")
        _require_non_empty(new_id, "new_id")

        if self._is_scoped(type_):
            keys = [type_, old_id, self._category, self._environment]
        else:
            keys = [type_, old_id]
        await self._id_map.set_path_and_save(keys, new_id)
