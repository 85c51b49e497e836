"""Package version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PACKAGE_NAME = "appcluster"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_tree_version(pyproject: Path) -> str | None:
    if not pyproject.is_file():
        return None
    with open(pyproject, "rb") as f:
        project = tomllib.load(f).get("project", {})
    if project.get("name") != PACKAGE_NAME:
        return None
    return project.get("version")


def get_version(pyproject: Path = _PYPROJECT) -> str:
    """
    Get the appcluster version.

    A source checkout reports the version in its pyproject.toml, so an
    editable install never lags behind a bump. Otherwise the installed
    distribution metadata is used.
    """
    source_version = _source_tree_version(pyproject)
    if source_version:
        return source_version
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
