"""
Dynamic configuration values.

A ``DynVal`` is the single representation of every untyped value in the
configuration language and on the command line: a piece of text plus the
span it came from. Typed views are produced on demand through the typed
parse protocol and never replace the text.
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import TYPE_CHECKING, Any, NewType, TypeVar

from pydantic_core import core_schema

from .errors import ConversionError
from .typed_parse import parse_as

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

    from .location import Span
    from .values import Coords

T = TypeVar("T")

VarName = NewType("VarName", str)


class DynVal:
    """
    A string-backed value with typed accessors.

    Equality and hashing only look at the text; the span is metadata.

    Examples:
        >>> DynVal("42").as_int()
        42
        >>> DynVal.from_value(True).text
        'true'
    """

    __slots__ = ("_text", "_span")

    def __init__(self, text: str, span: Span | None = None):
        self._text = text
        self._span = span

    @classmethod
    def from_value(cls, value: str | int | float | bool, span: Span | None = None) -> DynVal:
        """Build a DynVal from a Python scalar, rendering booleans as true/false."""
        if isinstance(value, bool):
            return cls("true" if value else "false", span)
        return cls(str(value), span)

    @property
    def text(self) -> str:
        return self._text

    @property
    def span(self) -> Span | None:
        return self._span

    def read_as(self, target: type[T]) -> T:
        """Convert to any type taking part in the typed parse protocol."""
        return parse_as(target, self._text, self._span)

    def as_string(self) -> str:
        return self._text

    def as_int(self) -> int:
        return self.read_as(int)

    def as_float(self) -> float:
        return self.read_as(float)

    def as_bool(self) -> bool:
        return self.read_as(bool)

    def as_duration(self) -> timedelta:
        return self.read_as(timedelta)

    def as_coords(self) -> Coords:
        from .values import Coords

        return self.read_as(Coords)

    def as_json(self) -> Any:
        """Parse the text as JSON (used for list and object values)."""
        try:
            return json.loads(self._text)
        except json.JSONDecodeError as e:
            raise ConversionError(self._text, "json", self._span, reason=e.msg) from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynVal):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"DynVal({self._text!r})"

    @classmethod
    def _validate(cls, value: Any) -> DynVal:
        if isinstance(value, DynVal):
            return value
        if isinstance(value, str | int | float | bool):
            return cls.from_value(value)
        raise ValueError(f"cannot build a DynVal from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.text, when_used="always"
            ),
        )
