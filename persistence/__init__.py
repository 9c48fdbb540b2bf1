from __future__ import annotations

from .disk_store import JsonDocumentStore
from .errors import (
    ArrayAutoCreateRefusedError,
    DirectoryMissingError,
    DocumentFileMissingError,
    DocumentParseError,
    DocumentStoreError,
    DocumentWriteError,
    NotInitializedError,
    PathTraversalError,
    PathValidationError,
)
from .interfaces import DocumentStore, PathDocumentStore
from .locks import AsyncMutex

__all__ = [
    "JsonDocumentStore",
    "DocumentStore",
    "PathDocumentStore",
    "AsyncMutex",
    "DocumentStoreError",
    "NotInitializedError",
    "DirectoryMissingError",
    "DocumentFileMissingError",
    "DocumentParseError",
    "DocumentWriteError",
    "PathValidationError",
    "PathTraversalError",
    "ArrayAutoCreateRefusedError",
]
