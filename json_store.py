from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json_text(path: Path) -> str:
    """
    Read the raw text of a JSON file.

    Raises FileNotFoundError for a missing file; parsing is left to the caller
    so that it can decide what a malformed document means.
    """
    return path.read_text(encoding="utf-8")


def dump_json_text(payload: Any, *, indent: int = 2, sort_keys: bool = False) -> str:
    """
    Serialize payload with stable formatting.

    NaN/Infinity are rejected so that the output is always valid JSON.
    """
    return json.dumps(payload, indent=indent, sort_keys=sort_keys, ensure_ascii=False, allow_nan=False)


def temp_path_for(path: Path) -> Path:
    return path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically replace path with text.

    Writes to a uniquely named sibling temp file, fsyncs it, then renames it
    over the target. The temp file is removed if any step fails.

    The containing directory is not fsynced after the rename, so on power
    loss (not process crash) the rename may not be durable on every
    filesystem.
    """
    tmp_path = temp_path_for(path)
    try:
        with open(tmp_path, "x", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            # may never have been created
            logger.debug("could not remove temp file %s", tmp_path)
        raise


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = False) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.
    """
    atomic_write_text(path, dump_json_text(payload, indent=indent, sort_keys=sort_keys))
