"""
Error types for widgetconf parsing, value conversion and window argument binding.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from .location import Span


class WidgetConfError(Exception):
    """Base exception for all widgetconf errors."""

    def __init__(self, message: str, span: Span | None = None, hints: Iterable[str] = ()):
        self.message = message
        self.span = span
        self.hints = list(hints)
        super().__init__(self._format_message())

    def _located_message(self) -> str:
        """Message prefixed with its location if available."""
        if self.span:
            return f"{self.span}\n{self.message}"
        return self.message

    def _format_message(self) -> str:
        text = self._located_message()
        for hint in self.hints:
            text = f"{text}\n  note: {hint}"
        return text

    def with_hint(self, hint: str) -> Self:
        """Attach a corrective hint and return self for re-raising."""
        self.hints.append(hint)
        self.args = (self._format_message(),)
        return self


class ParseError(WidgetConfError):
    """
    Raised when configuration text does not match the expected grammar.

    Examples:
    - Unterminated string or unbalanced parentheses
    - Wrong kind of child in an element (symbol expected, list found)
    - Missing required attribute
    - Unknown top-level element or duplicate definition
    """

    def __init__(
        self,
        message: str,
        span: Span | None = None,
        element: str | None = None,
        hints: Iterable[str] = (),
    ):
        self.element = element
        super().__init__(message, span, hints)

    def _located_message(self) -> str:
        text = super()._located_message()
        if self.element:
            text = f"{text}\n  in ({self.element} ...)"
        return text


class ConversionError(WidgetConfError):
    """
    Raised when a text value cannot be turned into the requested type.

    Attributes:
        value: The offending text
        target: Name of the type the conversion targeted
        key: Argument or attribute name the value was supplied under, if any
        reason: Optional detail from the underlying parser
    """

    def __init__(
        self,
        value: str,
        target: str,
        span: Span | None = None,
        key: str | None = None,
        reason: str | None = None,
        hints: Iterable[str] = (),
    ):
        self.value = value
        self.target = target
        self.key = key
        self.reason = reason
        message = f"Failed to turn `{value}` into a value of type {target}"
        if key:
            message += f" (argument '{key}')"
        if reason:
            message += f": {reason}"
        super().__init__(message, span, hints)

    def for_key(self, key: str) -> ConversionError:
        """Copy of this error that names the argument key it was read from."""
        return ConversionError(self.value, self.target, self.span, key, self.reason, self.hints)


class ResolutionError(WidgetConfError):
    """Raised when window arguments cannot be bound to a window definition."""

    def __init__(self, message: str, window: str, instance_id: str):
        self.window = window
        self.instance_id = instance_id
        super().__init__(message)


class MissingArgumentError(ResolutionError):
    """A required window parameter received no value."""

    def __init__(self, arg_name: str, window: str, instance_id: str):
        self.arg_name = arg_name
        super().__init__(
            f"Error, {arg_name} was required when creating window '{window}' "
            f"(instance '{instance_id}') but was not given",
            window,
            instance_id,
        )


class UnexpectedArgumentError(ResolutionError):
    """One or more supplied variables are not declared by the window."""

    def __init__(self, names: Iterable[str], window: str, instance_id: str):
        self.names = list(names)
        verb = "was" if len(self.names) == 1 else "were"
        super().__init__(
            f"'{','.join(self.names)}' {verb} unexpectedly defined when creating "
            f"window '{window}' (instance '{instance_id}')",
            window,
            instance_id,
        )


class UnknownWindowError(WidgetConfError):
    """No window definition with the requested name exists in the config."""

    def __init__(self, name: str, known: Iterable[str] = ()):
        self.name = name
        message = f"No window named '{name}' exists in config"
        known = sorted(known)
        if known:
            message += f"\n  available windows: {', '.join(known)}"
        super().__init__(message)


def make_parse_error(
    message: str,
    span: Span | None = None,
    element: str | None = None,
    hint: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with location and an optional hint.

    Args:
        message: Error description
        span: Source range of the offending construct
        element: Tag of the enclosing element (e.g. ``defvar``)
        hint: Optional corrective note

    Returns:
        ParseError with context attached
    """
    return ParseError(message, span, element, [hint] if hint else [])
