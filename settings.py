from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Where id maps and run reports live
    data_dir: Path

    # On-disk JSON formatting
    json_indent: int
    json_sort_keys: bool

    # Write a JSON report for every finished migration run
    persist_run_reports: bool


def get_settings() -> Settings:
    data_dir = Path(os.getenv("DOCSTORE_DATA_DIR", "data")).expanduser()

    json_indent = _env_int("DOCSTORE_JSON_INDENT", 2)
    # Insertion order by default so hand-edited files keep their layout.
    json_sort_keys = _env_bool("DOCSTORE_JSON_SORT_KEYS", False)

    persist_run_reports = _env_bool("DOCSTORE_PERSIST_RUN_REPORTS", True)

    return Settings(
        data_dir=data_dir,
        json_indent=json_indent,
        json_sort_keys=json_sort_keys,
        persist_run_reports=persist_run_reports,
    )
