"""
Script-backed variables.

Examples:
    (defpoll time :interval "1s" :initial "00:00" "date +%H:%M")
    (deflisten workspaces :initial "[]" "scripts/workspaces.sh")

The command itself is run by the host application; here it is only parsed
and validated.
"""

from __future__ import annotations

from datetime import timedelta
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..ast_iterator import AstIterator
from ..dynval import DynVal, VarName
from ..from_ast import FromAstElementContent
from ..location import Span


class PollScriptVar(BaseModel, FromAstElementContent):
    """A variable refreshed by re-running a command every ``interval``."""

    ELEMENT_NAME: ClassVar[str] = "defpoll"
    USAGE: ClassVar[str | None] = '(defpoll name :interval "10s" "date")'

    name: VarName
    command: str
    interval: timedelta
    initial_value: DynVal | None = None
    run_while: bool = True
    span: Span

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tail(cls, span: Span, iterator: AstIterator) -> PollScriptVar:
        _, name = iterator.expect_symbol()
        attrs = iterator.expect_key_values()
        interval = attrs.primitive_required("interval", timedelta)
        initial_value = attrs.dynval_optional("initial")
        run_while = attrs.flag("run-while", True)
        _, command = iterator.expect_literal()
        iterator.expect_done()
        return cls(
            name=VarName(name),
            command=command.as_string(),
            interval=interval,
            initial_value=initial_value,
            run_while=run_while,
            span=span,
        )


class ListenScriptVar(BaseModel, FromAstElementContent):
    """A variable updated with every line a long-running command prints."""

    ELEMENT_NAME: ClassVar[str] = "deflisten"
    USAGE: ClassVar[str | None] = '(deflisten name :initial "" "tail -F /tmp/file")'

    name: VarName
    command: str
    initial_value: DynVal | None = None
    span: Span

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tail(cls, span: Span, iterator: AstIterator) -> ListenScriptVar:
        _, name = iterator.expect_symbol()
        attrs = iterator.expect_key_values()
        initial_value = attrs.dynval_optional("initial")
        _, command = iterator.expect_literal()
        iterator.expect_done()
        return cls(
            name=VarName(name),
            command=command.as_string(),
            initial_value=initial_value,
            span=span,
        )


ScriptVarDefinition = PollScriptVar | ListenScriptVar
