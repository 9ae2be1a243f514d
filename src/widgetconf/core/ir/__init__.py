"""
widgetconf configuration entity types.

All entity types are re-exported from this package.
"""

from .config import Config
from .monitor import AnyMonitor, MonitorIdentifier, NamedMonitor, NumericMonitor
from .script_var_definition import ListenScriptVar, PollScriptVar, ScriptVarDefinition
from .var_definition import VarDefinition
from .window_definition import AttrSpec, WindowDefinition
from .window_geometry import AnchorAlignment, AnchorPoint, WindowGeometry, WindowStacking

__all__ = [
    "AnchorAlignment",
    "AnchorPoint",
    "AnyMonitor",
    "AttrSpec",
    "Config",
    "ListenScriptVar",
    "MonitorIdentifier",
    "NamedMonitor",
    "NumericMonitor",
    "PollScriptVar",
    "ScriptVarDefinition",
    "VarDefinition",
    "WindowDefinition",
    "WindowGeometry",
    "WindowStacking",
]
