"""
Project metadata lookups used to stamp `service` and `version` on JSON log lines.

An installed distribution answers through importlib.metadata; a source checkout
reads the `[project]` table of the nearest pyproject.toml instead.
"""

from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any
import tomllib

DISTRIBUTION_NAME = "book-api"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Nearest pyproject.toml in `start` or one of its first `max_up - 1` parents."""
    for folder in [start, *start.parents][:max_up]:
        candidate = folder / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=8)
def _project_table(start: Path, max_up: int) -> dict:
    pyproject = find_pyproject(start, max_up)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_pyproject_value(key: str, start: str | Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Value of `project.<key>` from the nearest pyproject.toml above `start`
    (default: this module's folder), or `default`.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    return _project_table(start_path, max_up).get(key, default)


def get_project_name(start: Path | str | None = None, default: str | None = None) -> str | None:
    return get_pyproject_value("name", start=start, default=default)


def get_project_version(start: Path | str | None = None, default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return get_pyproject_value("version", start=start, default=default)
