from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from json_store import atomic_write_json

logger = logging.getLogger(__name__)

RULE = "═" * 50


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_message(error: BaseException | str) -> str:
    if isinstance(error, str):
        return error
    # KeyError's str() is the repr of the key
    if isinstance(error, KeyError) and error.args:
        return f"{type(error).__name__}: {error.args[0]}"
    return str(error) or type(error).__name__


class MigratedEntry(BaseModel):
    type: str
    old_id: str
    new_id: str
    details: dict[str, Any] | None = None
    timestamp: str = Field(default_factory=_utc_now_iso)


class SkippedEntry(BaseModel):
    type: str
    old_id: str
    reason: str
    timestamp: str = Field(default_factory=_utc_now_iso)


class FailedEntry(BaseModel):
    type: str
    old_id: str
    error: str
    timestamp: str = Field(default_factory=_utc_now_iso)


class RunCounts(BaseModel):
    migrated: int
    skipped: int
    failed: int
    total: int


class RunEntries(BaseModel):
    migrated: list[MigratedEntry] = Field(default_factory=list)
    skipped: list[SkippedEntry] = Field(default_factory=list)
    failed: list[FailedEntry] = Field(default_factory=list)


class MigrationRunLog:
    """
    Audit trail for one migration run: what was migrated, skipped, or failed.
    """

    def __init__(self) -> None:
        self._entries = RunEntries()

    def migrated(self, type_: str, old_id: str, new_id: str, details: dict[str, Any] | None = None) -> None:
        self._entries.migrated.append(MigratedEntry(type=type_, old_id=old_id, new_id=new_id, details=details))
        logger.info("✓ %s %s → %s", type_, old_id, new_id)

    def skipped(self, type_: str, old_id: str, reason: str) -> None:
        self._entries.skipped.append(SkippedEntry(type=type_, old_id=old_id, reason=reason))
        logger.info("⊘ %s %s skipped: %s", type_, old_id, reason)

    def failed(self, type_: str, old_id: str, error: BaseException | str) -> None:
        message = _error_message(error)
        self._entries.failed.append(FailedEntry(type=type_, old_id=old_id, error=message))
        logger.warning("✗ %s %s failed: %s", type_, old_id, message)

    def counts(self) -> RunCounts:
        e = self._entries
        return RunCounts(
            migrated=len(e.migrated),
            skipped=len(e.skipped),
            failed=len(e.failed),
            total=len(e.migrated) + len(e.skipped) + len(e.failed),
        )

    def by_type(self, type_: str) -> RunEntries:
        e = self._entries
        return RunEntries(
            migrated=[x for x in e.migrated if x.type == type_],
            skipped=[x for x in e.skipped if x.type == type_],
            failed=[x for x in e.failed if x.type == type_],
        )

    def has_failures(self) -> bool:
        return bool(self._entries.failed)

    def to_disk_doc(self) -> dict[str, Any]:
        return self._entries.model_dump(mode="json", exclude_none=True)

    def summary(self) -> str:
        counts = self.counts()
        lines = [
            RULE,
            "Migration Summary",
            RULE,
            f"  Migrated: {counts.migrated}",
            f"  Skipped:  {counts.skipped}",
            f"  Failed:   {counts.failed}",
            f"  Total:    {counts.total}",
        ]
        if self._entries.failed:
            lines.append("")
            lines.append("Failures:")
            lines.extend(f"  • {e.type} {e.old_id}: {e.error}" for e in self._entries.failed)
        lines.append(RULE)

        text = "\n".join(lines)
        logger.info("\n%s", text)
        return text

    async def write_report(self, path: Path) -> Path:
        await asyncio.to_thread(atomic_write_json, path, self.to_disk_doc())
        return path
