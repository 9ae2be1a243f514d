"""
Syntax tree nodes for the configuration language.

Every node records its span. Element parsers consume these nodes through
``AstIterator`` rather than inspecting them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic_core import core_schema

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

    from .dynval import DynVal
    from .location import Span


@dataclass(frozen=True)
class Ast:
    """Base class of all syntax tree nodes."""

    TYPE_NAME: ClassVar[str] = "node"

    span: Span

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Nodes are carried through IR models untouched
        return core_schema.is_instance_schema(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )


@dataclass(frozen=True)
class ListNode(Ast):
    """A parenthesized form: ``(tag child...)``."""

    TYPE_NAME: ClassVar[str] = "list"

    children: tuple[Ast, ...] = ()

    def __str__(self) -> str:
        return "(" + " ".join(str(child) for child in self.children) + ")"


@dataclass(frozen=True)
class ArrayNode(Ast):
    """A bracketed sequence: ``[a b c]``."""

    TYPE_NAME: ClassVar[str] = "array"

    children: tuple[Ast, ...] = ()

    def __str__(self) -> str:
        return "[" + " ".join(str(child) for child in self.children) + "]"


@dataclass(frozen=True)
class KeywordNode(Ast):
    """An attribute key: ``:name``."""

    TYPE_NAME: ClassVar[str] = "keyword"

    name: str = ""

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class SymbolNode(Ast):
    """A bare identifier."""

    TYPE_NAME: ClassVar[str] = "symbol"

    name: str = ""

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LiteralNode(Ast):
    """A string, number or boolean literal."""

    TYPE_NAME: ClassVar[str] = "literal"

    value: DynVal

    def __str__(self) -> str:
        text = self.value.text
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
