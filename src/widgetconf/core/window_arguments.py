"""
Window argument binding.

``WindowArguments`` holds what a caller asked for when opening a window: an
instance id, the window definition's name, structural overrides and the free
form variables given on the command line. Combined with the matching
``WindowDefinition`` it produces the variable environment the window is
rendered with.

Reserved argument names (``pos``, ``size``, ``screen``, ``anchor``,
``duration``) are read into typed overrides. They are only bound as
variables when the window declares a parameter of the same name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .dynval import DynVal, VarName
from .errors import ConversionError, MissingArgumentError, UnexpectedArgumentError
from .ir import AnchorPoint, AnyMonitor, MonitorIdentifier, WindowDefinition, WindowGeometry
from .typed_parse import parse_as
from .values import Coords

logger = logging.getLogger(__name__)

T = TypeVar("T")

RESERVED_ARGS: dict[str, type] = {
    "pos": Coords,
    "size": Coords,
    "screen": MonitorIdentifier,
    "anchor": AnchorPoint,
    "duration": timedelta,
}


def extract_value_from_args(
    name: str, args: Mapping[VarName, DynVal], target: type[T]
) -> T | None:
    """
    Read one argument as ``target`` without removing it.

    Returns:
        The converted value, or None if the argument was not given

    Raises:
        ConversionError: If the argument was given but is not a valid ``target``
    """
    value = args.get(VarName(name))
    if value is None:
        return None
    try:
        return parse_as(target, value.text, value.span)
    except ConversionError as e:
        raise e.for_key(name) from e


class ResolvedWindow(BaseModel):
    """
    Everything needed to render one window instance.

    Attributes:
        instance_id: Unique id of the running window
        config_name: Name of the window definition it was opened from
        local_variables: Exactly one value per declared parameter
        defaulted: Optional parameters that were not supplied and hold the
            empty placeholder value
        monitor: Monitor override, else the definition's default
        geometry: Definition geometry with pos/size/anchor overrides applied
        duration: How long the window stays open, if limited
    """

    instance_id: str
    config_name: str
    local_variables: dict[VarName, DynVal]
    defaulted: frozenset[VarName] = frozenset()
    monitor: AnyMonitor | None = None
    geometry: WindowGeometry | None = None
    duration: timedelta | None = None

    model_config = ConfigDict(frozen=True)


class WindowArguments(BaseModel):
    """
    A request to open one window instance.

    ``args`` keeps every supplied value, reserved names included; reading the
    overrides never removes anything from it.
    """

    instance_id: str
    config_name: str
    pos: Coords | None = None
    size: Coords | None = None
    monitor: AnyMonitor | None = None
    anchor: AnchorPoint | None = None
    duration: timedelta | None = None
    args: dict[VarName, DynVal] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def new_from_args(
        cls,
        instance_id: str,
        config_name: str,
        args: Mapping[str, DynVal | str],
    ) -> WindowArguments:
        """
        Build arguments from raw name/value pairs, reading the reserved overrides.

        Raises:
            ConversionError: If a reserved argument holds an invalid value
        """
        values = {
            VarName(name): value if isinstance(value, DynVal) else DynVal(value)
            for name, value in args.items()
        }
        return cls(
            instance_id=instance_id,
            config_name=config_name,
            pos=extract_value_from_args("pos", values, Coords),
            size=extract_value_from_args("size", values, Coords),
            monitor=extract_value_from_args("screen", values, MonitorIdentifier),
            anchor=extract_value_from_args("anchor", values, AnchorPoint),
            duration=extract_value_from_args("duration", values, timedelta),
            args=values,
        )

    def free_form_args(self, window_def: WindowDefinition) -> dict[VarName, DynVal]:
        """Supplied variables, minus reserved names the window does not declare."""
        declared = set(window_def.expected_arg_names())
        return {
            name: value
            for name, value in self.args.items()
            if name not in RESERVED_ARGS or name in declared
        }

    def get_local_window_variables(self, window_def: WindowDefinition) -> dict[VarName, DynVal]:
        """
        Bind the supplied values to the window's declared parameters.

        Raises:
            MissingArgumentError: If a required parameter has no value
            UnexpectedArgumentError: If values were given for undeclared names
        """
        variables, _ = self._bind(window_def)
        return variables

    def resolve(self, window_def: WindowDefinition) -> ResolvedWindow:
        """Bind variables and apply structural overrides to the window's defaults."""
        if window_def.name != self.config_name:
            raise ValueError(
                f"Arguments for window '{self.config_name}' cannot be resolved "
                f"against definition '{window_def.name}'"
            )
        variables, defaulted = self._bind(window_def)

        geometry = window_def.geometry
        if any(value is not None for value in (self.pos, self.size, self.anchor)):
            if geometry is None:
                geometry = WindowGeometry()
            geometry = geometry.override(self.pos, self.size, self.anchor)

        logger.debug(
            "Resolved window %s (instance %s) with %d variable(s)",
            self.config_name,
            self.instance_id,
            len(variables),
        )
        return ResolvedWindow(
            instance_id=self.instance_id,
            config_name=self.config_name,
            local_variables=variables,
            defaulted=frozenset(defaulted),
            monitor=self.monitor if self.monitor is not None else window_def.monitor,
            geometry=geometry,
            duration=self.duration,
        )

    def _bind(self, window_def: WindowDefinition) -> tuple[dict[VarName, DynVal], list[VarName]]:
        declared = set(window_def.expected_arg_names())
        variables: dict[VarName, DynVal] = {}

        # Implicit bindings first so explicit arguments override them
        if "id" in declared:
            variables[VarName("id")] = DynVal(self.instance_id)
        if self.monitor is not None and "screen" in declared:
            variables[VarName("screen")] = self.monitor.to_dynval()

        variables.update(self.free_form_args(window_def))

        defaulted = []
        for arg in window_def.expected_args:
            if arg.name in variables:
                continue
            if not arg.optional:
                raise MissingArgumentError(arg.name, self.config_name, self.instance_id)
            variables[arg.name] = DynVal("")
            defaulted.append(arg.name)

        unexpected = [name for name in variables if name not in declared]
        if unexpected:
            raise UnexpectedArgumentError(unexpected, self.config_name, self.instance_id)

        return variables, defaulted
