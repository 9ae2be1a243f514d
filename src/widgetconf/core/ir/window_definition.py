"""
Window definitions.

    (defwindow bar [screen ?label]
      :monitor 0
      :geometry (geometry :width "100%" :height "30px" :anchor "top center")
      :stacking "fg"
      (box label))

The bracketed list declares the parameters a window instance must be opened
with; a leading ``?`` marks a parameter as optional.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..ast import ArrayNode, Ast, SymbolNode
from ..ast_iterator import AstIterator, describe
from ..dynval import VarName
from ..from_ast import FromAstElementContent
from ..location import Span
from .monitor import AnyMonitor, MonitorIdentifier
from .window_geometry import WindowGeometry, WindowStacking


class AttrSpec(BaseModel):
    """One declared window parameter."""

    name: VarName
    optional: bool = False
    span: Span

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_symbol(cls, span: Span, text: str) -> AttrSpec:
        if text.startswith("?"):
            return cls(name=VarName(text[1:]), optional=True, span=span)
        return cls(name=VarName(text), optional=False, span=span)

    def __str__(self) -> str:
        return f"?{self.name}" if self.optional else self.name


class WindowDefinition(BaseModel, FromAstElementContent):
    """
    Declarative schema of a window.

    Attributes:
        name: Name used to open the window
        expected_args: Declared parameters, in declaration order
        monitor: Default monitor, overridable when opening
        geometry: Default geometry, overridable when opening
        stacking: Layer the window is placed on
        exclusive: Whether the window reserves screen space
        focusable: Whether the window can take keyboard focus
        resizable: Whether the window may be resized
        widget: Unevaluated body handed to the renderer
        span: Where the definition was written
    """

    ELEMENT_NAME: ClassVar[str] = "defwindow"
    USAGE: ClassVar[str | None] = (
        "(defwindow name [arg ?optional-arg] :geometry (geometry ...) widget)"
    )

    name: str
    expected_args: list[AttrSpec] = Field(default_factory=list)
    monitor: AnyMonitor | None = None
    geometry: WindowGeometry | None = None
    stacking: WindowStacking = WindowStacking.FOREGROUND
    exclusive: bool = False
    focusable: bool = False
    resizable: bool = True
    widget: Ast
    span: Span

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tail(cls, span: Span, iterator: AstIterator) -> WindowDefinition:
        _, name = iterator.expect_symbol()
        expected_args = []
        if isinstance(iterator.peek(), ArrayNode):
            _, arg_nodes = iterator.expect_array()
            expected_args = cls._parse_expected_args(iterator, arg_nodes)

        attrs = iterator.expect_key_values()
        geometry_node = attrs.ast_optional("geometry")
        geometry = WindowGeometry.from_ast(geometry_node) if geometry_node is not None else None
        stacking = attrs.primitive_optional("stacking", WindowStacking)

        widget = iterator.expect_any()
        iterator.expect_done()
        return cls(
            name=name,
            expected_args=expected_args,
            monitor=attrs.primitive_optional("monitor", MonitorIdentifier),
            geometry=geometry,
            stacking=WindowStacking.FOREGROUND if stacking is None else stacking,
            exclusive=attrs.flag("exclusive", False),
            focusable=attrs.flag("focusable", False),
            resizable=attrs.flag("resizable", True),
            widget=widget,
            span=span,
        )

    @staticmethod
    def _parse_expected_args(iterator: AstIterator, nodes: list[Ast]) -> list[AttrSpec]:
        specs: list[AttrSpec] = []
        seen: set[str] = set()
        for node in nodes:
            if not isinstance(node, SymbolNode):
                raise iterator.error(
                    f"Expected a parameter name, but found {describe(node)}", node.span
                )
            spec = AttrSpec.from_symbol(node.span, node.name)
            if not spec.name:
                raise iterator.error("Expected a parameter name after '?'", node.span)
            if spec.name in seen:
                raise iterator.error(f"Parameter '{spec.name}' declared twice", node.span)
            seen.add(spec.name)
            specs.append(spec)
        return specs

    def expected_arg_names(self) -> list[VarName]:
        return [arg.name for arg in self.expected_args]
