"""
Process-wide holder of the current configuration.

The registry is written once per (re)load and read by every window
resolution. A reload parses outside the lock and only swaps the finished
``Config`` in, so resolutions never see a half-loaded configuration.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from .ir import Config, WindowDefinition
from .loader import load_config, load_config_file
from .window_arguments import ResolvedWindow, WindowArguments

logger = logging.getLogger(__name__)


class ConfigRegistry:
    """Current configuration plus window lookup and resolution."""

    def __init__(self, config: Config | None = None):
        self._lock = threading.Lock()
        self._config = Config() if config is None else config

    @property
    def config(self) -> Config:
        with self._lock:
            return self._config

    def swap(self, config: Config) -> Config:
        """Install a new configuration, returning the previous one."""
        with self._lock:
            previous, self._config = self._config, config
        return previous

    def reload(self, text: str, file: str = "<string>") -> Config:
        """
        Parse text and install it. On any error the current config stays active.

        Raises:
            ParseError: If the text is malformed
            ConversionError: If a typed attribute is invalid
        """
        config = load_config(text, file)
        self.swap(config)
        logger.info("Configuration reloaded from %s", file)
        return config

    def reload_file(self, path: Path) -> Config:
        config = load_config_file(path)
        self.swap(config)
        logger.info("Configuration reloaded from %s", path)
        return config

    def window_definition(self, name: str) -> WindowDefinition:
        """
        Raises:
            UnknownWindowError: If no window with that name is defined
        """
        return self.config.window_definition(name)

    def resolve(self, args: WindowArguments) -> ResolvedWindow:
        """Resolve window arguments against the current configuration."""
        return args.resolve(self.window_definition(args.config_name))
