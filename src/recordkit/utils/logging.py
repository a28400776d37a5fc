from pathlib import Path
from importlib import metadata as importlib_metadata
from typing import Any
import tomllib

DEFAULT_PROJECT_NAME = "recordkit"

# --------------------
# Find pyproject.toml
# --------------------


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Return the value for dot-separated `key` (e.g. "project.version") from the
    nearest pyproject.toml, walking up at most `max_up` directories from `start`
    (defaults to this module's folder).

    Returns `default` if the file isn't found, can't be parsed, or the key is missing.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent

    pyproject = find_pyproject(start=start_path, max_up=max_up)
    if not pyproject or not key:
        return default

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    cur = data
    for part in key.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return default
    return cur


def get_project_name(start: Path | str | None = None, max_up: int = 5) -> str:
    """project.name from pyproject.toml, or the package name when not found."""
    return get_pyproject_value("project.name", start=start, max_up=max_up, default=DEFAULT_PROJECT_NAME)


def get_project_version(start: Path | str | None = None, max_up: int = 5, default: str = "unknown") -> str:
    """
    Installed distribution version if available, else project.version from
    pyproject.toml, else `default`.
    """
    name = get_project_name(start=start, max_up=max_up)
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        # not installed (e.g. running from a source checkout)
        pass

    val = get_pyproject_value("project.version", start=start, max_up=max_up, default=None)
    return val if val is not None else default


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
