from __future__ import annotations

from pathlib import Path

from settings import Settings

ID_MAP_FILENAME = "id-map.json"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def data_dir(settings: Settings) -> Path:
    return ensure_dir(settings.data_dir)


def reports_dir(settings: Settings) -> Path:
    return ensure_dir(data_dir(settings) / "reports")


def id_map_path(settings: Settings) -> Path:
    return data_dir(settings) / ID_MAP_FILENAME
