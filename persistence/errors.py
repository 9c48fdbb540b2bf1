from __future__ import annotations

from pathlib import Path


class DocumentStoreError(Exception):
    """Base class for every error raised by the document store."""


class NotInitializedError(DocumentStoreError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("JsonDocumentStore not initialized. Call load() first.")


class DirectoryMissingError(DocumentStoreError, FileNotFoundError):
    def __init__(self, directory: Path):
        self.directory = directory
        super().__init__(f"Directory does not exist: {directory}")


class DocumentFileMissingError(DocumentStoreError, FileNotFoundError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Document file does not exist: {path}")


class DocumentParseError(DocumentStoreError, ValueError):
    def __init__(self, path: Path, cause: Exception | str):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to parse JSON from {path}: {cause}")


class DocumentWriteError(DocumentStoreError):
    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class PathValidationError(DocumentStoreError, ValueError):
    pass


class PathTraversalError(DocumentStoreError, TypeError):
    pass


class ArrayAutoCreateRefusedError(PathTraversalError):
    """Raised instead of guessing that a missing container should be a list."""
