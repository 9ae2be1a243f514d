"""
Shared protocol for declarative configuration elements.

An element class names its tag in ``ELEMENT_NAME``, optionally gives a usage
example in ``USAGE``, and implements ``from_tail`` over the children that
follow the tag. ``from_ast`` checks the form's shape and tag, and attaches the
usage example to any parse or conversion error raised while parsing the element.
"""

from __future__ import annotations

from typing import ClassVar, Self

from .ast import Ast, ListNode, SymbolNode
from .ast_iterator import AstIterator, describe
from .errors import ConversionError, ParseError, make_parse_error
from .location import Span


def element_tag(node: Ast) -> str | None:
    """Tag of a ``(tag ...)`` form, or None if the node is not such a form."""
    if isinstance(node, ListNode) and node.children and isinstance(node.children[0], SymbolNode):
        return node.children[0].name
    return None


class FromAstElementContent:
    """Mixin for entities parsed from a ``(tag child...)`` form."""

    ELEMENT_NAME: ClassVar[str]
    USAGE: ClassVar[str | None] = None

    @classmethod
    def from_tail(cls, span: Span, iterator: AstIterator) -> Self:
        """Build the entity from the children following the tag."""
        raise NotImplementedError

    @classmethod
    def from_ast(cls, node: Ast) -> Self:
        try:
            if not isinstance(node, ListNode):
                raise make_parse_error(
                    f"Expected a ({cls.ELEMENT_NAME} ...) form, but found {describe(node)}",
                    node.span,
                    element=cls.ELEMENT_NAME,
                )
            iterator = AstIterator(node.span, node.children, element=cls.ELEMENT_NAME)
            tag_span, tag = iterator.expect_symbol()
            if tag != cls.ELEMENT_NAME:
                raise iterator.error(
                    f"Expected element `{cls.ELEMENT_NAME}`, but found `{tag}`", tag_span
                )
            return cls.from_tail(node.span, iterator)
        except (ParseError, ConversionError) as e:
            if cls.USAGE:
                raise e.with_hint(f"Expected format: `{cls.USAGE}`")
            raise
