from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_settings(tmp_path: Path):
    """
    Settings pointing at a temp data directory so tests never touch real ./data.
    """
    from settings import Settings

    return Settings(
        data_dir=tmp_path / "data",
        json_indent=2,
        json_sort_keys=False,
        persist_run_reports=True,
    )


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "state.json"


def tmp_artifacts(directory: Path) -> list[Path]:
    return sorted(directory.glob("*.tmp"))
