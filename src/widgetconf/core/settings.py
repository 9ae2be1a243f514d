"""
Tool settings, read from ``widgetconf.toml``.

    [widgetconf]
    config = "widgets.wconf"
    log_level = "INFO"

Environment variables ``WIDGETCONF_CONFIG`` and ``WIDGETCONF_LOG_LEVEL``
take precedence over the file.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

SETTINGS_FILE = "widgetconf.toml"


@dataclass
class Settings:
    """Settings for the command line tool."""

    config_file: Path = Path("widgets.wconf")
    log_level: str = "WARNING"


def load_settings(root: Path | None = None) -> Settings:
    """
    Load settings from ``widgetconf.toml`` in root (default: current directory).

    A missing file yields the defaults. Relative config paths are resolved
    against root.
    """
    root = root or Path.cwd()
    settings = Settings()

    path = root / SETTINGS_FILE
    if path.exists():
        data = tomllib.loads(path.read_text(encoding="utf-8")).get("widgetconf", {})
        if "config" in data:
            settings.config_file = root / data["config"]
        settings.log_level = data.get("log_level", settings.log_level)

    if env_config := os.getenv("WIDGETCONF_CONFIG"):
        settings.config_file = Path(env_config)
    if env_level := os.getenv("WIDGETCONF_LOG_LEVEL"):
        settings.log_level = env_level

    settings.log_level = settings.log_level.upper()
    return settings
