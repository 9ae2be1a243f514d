"""
Typed consumption of an element's children.

``AstIterator`` walks the children of one form and exposes ``expect_*``
operations that either return the typed result or raise a located
``ParseError``. ``Attributes`` is the result of ``expect_key_values`` and
gives typed access to a ``:key value`` block.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from .ast import ArrayNode, Ast, KeywordNode, LiteralNode, SymbolNode
from .dynval import DynVal
from .errors import ConversionError, ParseError, make_parse_error
from .location import Span
from .typed_parse import parse_as

T = TypeVar("T")
A = TypeVar("A", bound=Ast)


def describe(node: Ast) -> str:
    return f"a {node.TYPE_NAME} `{node}`"


class AstIterator:
    """
    Iterator over the remaining children of a form.

    Attributes:
        span: Span of the enclosing form
        element: Tag of the element being parsed, used in diagnostics
    """

    def __init__(self, span: Span, children: Iterable[Ast], element: str | None = None):
        self.span = span
        self.element = element
        self._children = list(children)
        self._index = 0

    def __iter__(self) -> Iterator[Ast]:
        return self

    def __next__(self) -> Ast:
        node = self.peek()
        if node is None:
            raise StopIteration
        self._index += 1
        return node

    def peek(self) -> Ast | None:
        """Return the next child without consuming it."""
        if self._index >= len(self._children):
            return None
        return self._children[self._index]

    def error(self, message: str, span: Span | None = None) -> ParseError:
        return make_parse_error(message, self.span if span is None else span, element=self.element)

    def _expect(self, node_type: type[A], expected: str) -> A:
        node = self.peek()
        if node is None:
            raise self.error(f"Expected {expected}, but the form ended", self.span.point_end())
        if not isinstance(node, node_type):
            raise self.error(f"Expected {expected}, but found {describe(node)}", node.span)
        self._index += 1
        return node

    def expect_symbol(self) -> tuple[Span, str]:
        node = self._expect(SymbolNode, "a symbol")
        return node.span, node.name

    def expect_literal(self) -> tuple[Span, DynVal]:
        node = self._expect(LiteralNode, "a literal value")
        return node.span, node.value

    def expect_array(self) -> tuple[Span, list[Ast]]:
        node = self._expect(ArrayNode, "an array")
        return node.span, list(node.children)

    def expect_any(self) -> Ast:
        return self._expect(Ast, "another child")

    def expect_key_values(self) -> Attributes:
        """
        Consume every consecutive ``:key value`` pair.

        An empty block is valid; a keyword without a following value is not.
        """
        entries: dict[str, AttrEntry] = {}
        start = self.peek()
        while isinstance(self.peek(), KeywordNode):
            keyword = self._expect(KeywordNode, "an attribute keyword")
            value = self.peek()
            if value is None or isinstance(value, KeywordNode):
                raise self.error(f"Missing value for attribute :{keyword.name}", keyword.span)
            if keyword.name in entries:
                raise self.error(f"Attribute :{keyword.name} given more than once", keyword.span)
            self._index += 1
            entries[keyword.name] = AttrEntry(key_span=keyword.span, value=value)

        span = start.span if entries and start is not None else self.span
        return Attributes(span, entries, self.element)

    def expect_done(self) -> None:
        """Fail if any child is left."""
        node = self.peek()
        if node is not None:
            raise self.error(f"Expected the end of the form, but found {describe(node)}", node.span)


@dataclass(frozen=True)
class AttrEntry:
    key_span: Span
    value: Ast


class Attributes:
    """
    A ``:key value`` block addressed by attribute name.

    Every accessor comes in a required form (missing key is a ``ParseError``)
    and an optional form (missing key is ``None``).
    """

    def __init__(self, span: Span, entries: dict[str, AttrEntry], element: str | None = None):
        self.span = span
        self.element = element
        self._entries = entries

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        return list(self._entries)

    def _missing(self, key: str) -> ParseError:
        return make_parse_error(f"Missing attribute :{key}", self.span, element=self.element)

    def ast_optional(self, key: str) -> Ast | None:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def ast_required(self, key: str) -> Ast:
        node = self.ast_optional(key)
        if node is None:
            raise self._missing(key)
        return node

    def dynval_optional(self, key: str) -> DynVal | None:
        """The literal value of an attribute, or None when absent."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not isinstance(entry.value, LiteralNode):
            raise make_parse_error(
                f"Expected a literal value for attribute :{key}, but found {describe(entry.value)}",
                entry.value.span,
                element=self.element,
            )
        return entry.value.value

    def dynval_required(self, key: str) -> DynVal:
        value = self.dynval_optional(key)
        if value is None:
            raise self._missing(key)
        return value

    def primitive_optional(self, key: str, target: type[T]) -> T | None:
        value = self.dynval_optional(key)
        if value is None:
            return None
        try:
            return parse_as(target, value.text, value.span)
        except ConversionError as e:
            raise e.for_key(f":{key}") from e

    def primitive_required(self, key: str, target: type[T]) -> T:
        value = self.primitive_optional(key, target)
        if value is None:
            raise self._missing(key)
        return value

    def flag(self, key: str, default: bool = False) -> bool:
        """A boolean attribute that falls back to default when absent."""
        value = self.primitive_optional(key, bool)
        return default if value is None else value
