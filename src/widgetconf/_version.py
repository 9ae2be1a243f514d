"""Installed version of widgetconf."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Version from the installed distribution; ``0.0.0`` when running from a bare checkout."""
    try:
        return version("widgetconf")
    except PackageNotFoundError:
        return "0.0.0"
