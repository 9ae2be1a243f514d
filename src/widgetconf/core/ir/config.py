"""
The loaded configuration: every window and variable definition by name.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..dynval import VarName
from ..errors import UnknownWindowError
from .script_var_definition import ListenScriptVar, PollScriptVar
from .var_definition import VarDefinition
from .window_definition import WindowDefinition


class Config(BaseModel):
    """
    Result of loading one configuration text.

    Read-only once built; a reload produces a new Config.
    """

    window_definitions: dict[str, WindowDefinition] = Field(default_factory=dict)
    var_definitions: dict[VarName, VarDefinition] = Field(default_factory=dict)
    script_vars: dict[VarName, PollScriptVar | ListenScriptVar] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def window_definition(self, name: str) -> WindowDefinition:
        """
        Look up a window definition by name.

        Raises:
            UnknownWindowError: If no window with that name is defined
        """
        try:
            return self.window_definitions[name]
        except KeyError:
            raise UnknownWindowError(name, self.window_definitions) from None

    def variable_names(self) -> list[VarName]:
        """Names of all global variables, plain and script-backed."""
        return [*self.var_definitions, *self.script_vars]
