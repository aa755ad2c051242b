"""Installed fxexpr version."""

from importlib.metadata import PackageNotFoundError, version

UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version of the installed fxexpr distribution, or 0.0.0 from a bare checkout."""
    try:
        return version("fxexpr")
    except PackageNotFoundError:
        return UNKNOWN_VERSION
