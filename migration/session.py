from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

from persistence.disk_store import JsonDocumentStore
from persistence.paths import id_map_path, reports_dir
from settings import Settings, get_settings

from .dependency_resolver import DependencyResolver
from .run_log import MigrationRunLog

logger = logging.getLogger(__name__)


def _run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")


@dataclass
class MigrationSession:
    settings: Settings
    id_map: JsonDocumentStore
    resolver: DependencyResolver
    run_log: MigrationRunLog = field(default_factory=MigrationRunLog)
    run_id: str = field(default_factory=_run_id)

    async def finish(self) -> Path | None:
        """
        Log the run summary and, if enabled, write the run report.

        Returns the report path, or None when reports are disabled.
        """
        self.run_log.summary()
        if not self.settings.persist_run_reports:
            return None
        report = reports_dir(self.settings) / f"{self.run_id}.json"
        await self.run_log.write_report(report)
        logger.info("wrote migration report %s", report)
        return report


async def open_migration(
    environment: str,
    category: str,
    *,
    settings: Settings | None = None,
    scoped_types: Iterable[str] | None = None,
) -> MigrationSession:
    """
    Load (creating if needed) the id map under the data directory and wire a
    resolver and run log around it.
    """
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    id_map = JsonDocumentStore(
        id_map_path(settings),
        indent=settings.json_indent,
        sort_keys=settings.json_sort_keys,
    )
    await id_map.load()

    resolver = DependencyResolver(id_map, environment, category, scoped_types=scoped_types)
    logger.info("opened id map %s for %s/%s", id_map.path, environment, category)
    return MigrationSession(settings=settings, id_map=id_map, resolver=resolver)
