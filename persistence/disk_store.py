from __future__ import annotations

import asyncio
import copy
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar

from json_store import atomic_write_text, dump_json_text, read_json_text

from . import key_paths
from .errors import (
    DirectoryMissingError,
    DocumentFileMissingError,
    DocumentParseError,
    DocumentWriteError,
    NotInitializedError,
)
from .interfaces import Document, DocumentStore, Updater
from .key_paths import Key
from .locks import AsyncMutex

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _empty_document() -> Document:
    return {}


class JsonDocumentStore(DocumentStore):
    """
    Keeps one JSON object in memory and persists it to a fixed path.

    - load() creates the file from default_factory when it is missing.
    - Writes are atomic (temp file + fsync + rename).
    - load/reload/save/update_and_save run one at a time, in call order.
    - update()/set_path() only touch memory and mark the store dirty.

    Callers only ever see deep copies of the document. Single process only:
    nothing stops another process from writing the same file.
    """

    def __init__(
        self,
        path: Path | str,
        default_factory: Callable[[], Document] | None = None,
        *,
        indent: int = 2,
        sort_keys: bool = False,
    ):
        self._path = Path(path)
        self._default_factory = default_factory or _empty_document
        self._indent = indent
        self._sort_keys = sort_keys
        self._data: Document = {}
        self._initialized = False
        self._dirty = False
        self._mutex = AsyncMutex()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def data(self) -> Document:
        self._assert_initialized()
        return copy.deepcopy(self._data)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> "JsonDocumentStore":
        """
        Read the document from disk, creating it from the default factory if
        the file does not exist. Must be called before anything else.
        """
        return await self._mutex.run_exclusive(self._load_locked)

    async def _load_locked(self) -> "JsonDocumentStore":
        directory = self._path.parent
        if not await asyncio.to_thread(directory.is_dir):
            raise DirectoryMissingError(directory)

        try:
            raw = await asyncio.to_thread(read_json_text, self._path)
        except FileNotFoundError:
            loaded = self._default_factory()
            await self._write_atomic(loaded)
            logger.debug("created %s from defaults", self._path)
        except UnicodeDecodeError as err:
            raise DocumentParseError(self._path, err) from err
        else:
            loaded = self._parse(raw)
            logger.debug("loaded %s", self._path)

        self._data = loaded
        self._initialized = True
        self._dirty = False
        return self

    async def reload(self) -> "JsonDocumentStore":
        """
        Re-read the document from disk, discarding unsaved changes.

        Unlike load(), a missing file is an error; reload never creates data.
        """
        self._assert_initialized()
        return await self._mutex.run_exclusive(self._reload_locked)

    async def _reload_locked(self) -> "JsonDocumentStore":
        try:
            raw = await asyncio.to_thread(read_json_text, self._path)
        except FileNotFoundError as err:
            raise DocumentFileMissingError(self._path) from err
        except UnicodeDecodeError as err:
            raise DocumentParseError(self._path, err) from err
        # Only replace state after a successful parse.
        self._data = self._parse(raw)
        self._dirty = False
        logger.debug("reloaded %s", self._path)
        return self

    async def save(self) -> None:
        self._assert_initialized()

        async def _save() -> None:
            snapshot = self._data
            await self._write_atomic(snapshot)
            self._mark_clean_if_unchanged(snapshot)

        await self._mutex.run_exclusive(_save)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, updater: Updater) -> None:
        """
        Change the document in memory without saving.

        updater is either a mapping, merged one level deep (nested values are
        replaced, not merged), or a callable that mutates a private copy; the
        copy is adopted only if the callable returns without raising.
        """
        self._assert_initialized()
        self._data = self._apply(updater)
        self._dirty = True

    async def update_and_save(self, updater: Updater) -> None:
        """
        Apply updater and write the result. If either step fails, the
        in-memory document is rolled back and the error re-raised.
        """
        self._assert_initialized()

        async def _update_and_save() -> None:
            backup = self._data
            try:
                self._data = self._apply(updater)
                snapshot = self._data
                await self._write_atomic(snapshot)
            except BaseException:
                self._data = backup
                raise
            self._mark_clean_if_unchanged(snapshot)

        await self._mutex.run_exclusive(_update_and_save)

    # ------------------------------------------------------------------
    # Path access
    # ------------------------------------------------------------------

    def get_path(self, *keys: Key, default: Any = None) -> Any:
        self._assert_initialized()
        return key_paths.get_path(self._data, keys, default)

    def has_path(self, *keys: Key) -> bool:
        self._assert_initialized()
        return key_paths.has_path(self._data, keys)

    def set_path(self, keys: Sequence[Key], value: Any) -> None:
        key_paths.validate_keys(keys)
        self.update(lambda doc: key_paths.set_at_path(doc, keys, copy.deepcopy(value)))

    async def set_path_and_save(self, keys: Sequence[Key], value: Any) -> None:
        key_paths.validate_keys(keys)
        await self.update_and_save(lambda doc: key_paths.set_at_path(doc, keys, copy.deepcopy(value)))

    # ------------------------------------------------------------------
    # Extension hooks for subclasses
    # ------------------------------------------------------------------

    def _data_snapshot(self) -> Mapping[str, Any]:
        """
        Read-only shallow view of the document, without the deep copy.

        Only the top level is frozen; nested values are the live objects and
        must not be mutated. Use update() or _set_data() to change state.
        """
        self._assert_initialized()
        return MappingProxyType(dict(self._data))

    def _set_data(self, data: Document) -> None:
        self._assert_initialized()
        self._data = data
        self._dirty = True

    async def _run_exclusive(self, fn: Callable[[], Awaitable[R]]) -> R:
        """Run fn under the store's queue, e.g. for read-modify-write sequences."""
        return await self._mutex.run_exclusive(fn)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, updater: Updater) -> Document:
        if callable(updater):
            cloned = copy.deepcopy(self._data)
            updater(cloned)
            return cloned
        return {**self._data, **copy.deepcopy(dict(updater))}

    def _parse(self, raw: str) -> Document:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as err:
            raise DocumentParseError(self._path, err) from err
        if not isinstance(parsed, dict):
            raise DocumentParseError(self._path, f"expected a JSON object, got {type(parsed).__name__}")
        return parsed

    async def _write_atomic(self, document: Document) -> None:
        try:
            text = dump_json_text(document, indent=self._indent, sort_keys=self._sort_keys)
            await asyncio.to_thread(atomic_write_text, self._path, text)
        except (OSError, TypeError, ValueError) as err:
            raise DocumentWriteError(self._path, err) from err
        logger.debug("wrote %s (%d chars)", self._path, len(text))

    def _mark_clean_if_unchanged(self, written: Document) -> None:
        # A non-queued update() may have landed while the write was suspended.
        if self._data is written:
            self._dirty = False

    def _assert_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError()
