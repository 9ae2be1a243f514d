"""
Configuration loading.

Parses configuration text into a ``Config``, dispatching each top-level form
to the element type registered for its tag.

Usage:
    from widgetconf.core.loader import load_config

    config = load_config(text, "widgets.wconf")
    bar = config.window_definition("bar")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

from .ast_iterator import describe
from .ast_parser import parse_forms
from .dynval import VarName
from .errors import make_parse_error
from .from_ast import FromAstElementContent, element_tag
from .ir import Config, ListenScriptVar, PollScriptVar, VarDefinition, WindowDefinition
from .location import Span

logger = logging.getLogger(__name__)

ELEMENT_TYPES: dict[str, type[FromAstElementContent]] = {
    element.ELEMENT_NAME: element
    for element in (WindowDefinition, VarDefinition, PollScriptVar, ListenScriptVar)
}


def load_config(text: str, file: str = "<string>") -> Config:
    """
    Parse configuration text.

    Args:
        text: Configuration source
        file: Name used in diagnostics

    Returns:
        Config with every definition keyed by name

    Raises:
        ParseError: On the first malformed, unknown or duplicate element
        ConversionError: If a typed attribute holds an invalid value
    """
    windows: dict[str, WindowDefinition] = {}
    variables: dict[VarName, VarDefinition] = {}
    script_vars: dict[VarName, PollScriptVar | ListenScriptVar] = {}
    variable_spans: dict[VarName, Span] = {}

    for form in parse_forms(text, file):
        tag = element_tag(form)
        if tag is None:
            raise make_parse_error(
                f"Expected a top-level (element ...) form, but found {describe(form)}",
                form.span,
            )

        element_type = ELEMENT_TYPES.get(tag)
        if element_type is None:
            raise make_parse_error(
                f"Unknown element `{tag}`",
                form.span,
                hint=f"known elements: {', '.join(sorted(ELEMENT_TYPES))}",
            )

        element = element_type.from_ast(form)

        if isinstance(element, WindowDefinition):
            if element.name in windows:
                raise make_parse_error(
                    f"Window '{element.name}' defined twice",
                    element.span,
                    element=tag,
                    hint=f"first defined at {windows[element.name].span}",
                )
            windows[element.name] = element
            continue

        element = cast(VarDefinition | PollScriptVar | ListenScriptVar, element)
        if element.name in variable_spans:
            raise make_parse_error(
                f"Variable '{element.name}' defined twice",
                element.span,
                element=tag,
                hint=f"first defined at {variable_spans[element.name]}",
            )
        variable_spans[element.name] = element.span
        if isinstance(element, VarDefinition):
            variables[element.name] = element
        else:
            script_vars[element.name] = element

    logger.info(
        "Loaded %d window(s), %d variable(s) and %d script variable(s) from %s",
        len(windows),
        len(variables),
        len(script_vars),
        file,
    )
    return Config(window_definitions=windows, var_definitions=variables, script_vars=script_vars)


def load_config_file(path: Path) -> Config:
    """Read and parse a configuration file."""
    logger.debug("Reading configuration from %s", path)
    return load_config(path.read_text(encoding="utf-8"), str(path))
