"""
widgetconf - declarative widget configuration binding.

Parses the S-expression configuration language into typed definitions and
binds the arguments a window is opened with to the parameters it declares.
"""

from ._version import get_version
from .core import ir
from .core.dynval import DynVal, VarName
from .core.errors import (
    ConversionError,
    MissingArgumentError,
    ParseError,
    ResolutionError,
    UnexpectedArgumentError,
    UnknownWindowError,
    WidgetConfError,
)
from .core.loader import load_config, load_config_file
from .core.registry import ConfigRegistry
from .core.window_arguments import ResolvedWindow, WindowArguments

__version__ = get_version()

__all__ = [
    "ConfigRegistry",
    "ConversionError",
    "DynVal",
    "MissingArgumentError",
    "ParseError",
    "ResolutionError",
    "ResolvedWindow",
    "UnexpectedArgumentError",
    "UnknownWindowError",
    "VarName",
    "WidgetConfError",
    "WindowArguments",
    "__version__",
    "ir",
    "load_config",
    "load_config_file",
]
