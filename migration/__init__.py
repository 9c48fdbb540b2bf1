from __future__ import annotations

from .dependency_resolver import DependencyNotFoundError, DependencyResolver
from .run_log import MigrationRunLog
from .session import MigrationSession, open_migration
from .transforms import add_defaults, omit, pick, remove_keys, rename_key

__all__ = [
    "DependencyResolver",
    "DependencyNotFoundError",
    "MigrationRunLog",
    "MigrationSession",
    "open_migration",
    "add_defaults",
    "omit",
    "pick",
    "remove_keys",
    "rename_key",
]
