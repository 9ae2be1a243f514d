"""
Variable definitions: ``(defvar name "initial-value")``.

Optional attributes go between the name and the initial value:

    (defvar volume :per_window true "50")
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..ast_iterator import AstIterator
from ..dynval import DynVal, VarName
from ..from_ast import FromAstElementContent
from ..location import Span


class VarDefinition(BaseModel, FromAstElementContent):
    """
    A plain variable with an initial value.

    Attributes:
        name: Variable name
        initial_value: Value before anything updates it
        per_window: Whether each window instance gets its own copy
        span: Where the definition was written
    """

    ELEMENT_NAME: ClassVar[str] = "defvar"
    USAGE: ClassVar[str | None] = '(defvar name "initial-value")'

    name: VarName
    initial_value: DynVal
    per_window: bool = False
    span: Span

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tail(cls, span: Span, iterator: AstIterator) -> VarDefinition:
        _, name = iterator.expect_symbol()
        attrs = iterator.expect_key_values()
        per_window = attrs.flag("per_window", False)
        _, initial_value = iterator.expect_literal()
        iterator.expect_done()
        return cls(name=VarName(name), initial_value=initial_value, per_window=per_window, span=span)
