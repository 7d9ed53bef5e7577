"""
Version management for daily-linear.

Reads the version from pyproject.toml, the single source of truth, and falls
back to the installed distribution metadata.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import tomli

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"

_FALLBACK_VERSION = "0.0.0"


def get_version_from_pyproject() -> str:
    """
    Read the version string from pyproject.toml.

    Returns:
        str: Version string, or the installed package version when the
        source tree is not available
    """
    try:
        with open(PYPROJECT_PATH, "rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        try:
            return version("daily-linear")
        except PackageNotFoundError:
            return _FALLBACK_VERSION


__version__ = get_version_from_pyproject()
