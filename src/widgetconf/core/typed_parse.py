"""
Typed parse protocol.

Every type that can be derived from configuration text is converted through
``parse_as``. Builtin targets (``str``, ``int``, ``float``, ``bool``,
``timedelta``) have registered parsers; any other class takes part by
implementing a ``from_str`` classmethod that raises ``ValueError`` on bad input.

``parse_as`` is the single place where such failures become ``ConversionError``,
so call sites never need to know which concrete type they are extracting.

Usage:
    from widgetconf.core.typed_parse import parse_as

    interval = parse_as(timedelta, "500ms")
    pos = parse_as(Coords, "10x20")
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from .errors import ConversionError

if TYPE_CHECKING:
    from .location import Span

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DURATION_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)(ms|s|min|m|h)")
_DURATION_UNITS = {
    "ms": "milliseconds",
    "s": "seconds",
    "min": "minutes",
    "m": "minutes",
    "h": "hours",
}


def parse_int(text: str) -> int:
    """Parse a strict integer: optional sign followed by ASCII digits."""
    if not _INT_RE.fullmatch(text):
        raise ValueError("not an integer")
    return int(text)


def parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError("not a number")
    return float(text)


def parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError("expected `true` or `false`")


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration such as ``500ms``, ``2s``, ``1.5min``, ``5m`` or ``1h``.

    A bare number has no unit and is rejected.
    """
    match = _DURATION_RE.fullmatch(text)
    if not match:
        raise ValueError("expected a number followed by one of ms, s, min, m, h")
    amount = float(match.group(1))
    unit = _DURATION_UNITS[match.group(2)]
    try:
        return timedelta(**{unit: amount})
    except OverflowError:
        raise ValueError("duration out of range") from None


_PARSERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: parse_int,
    float: parse_float,
    bool: parse_bool,
    timedelta: parse_duration,
}


_TYPE_NAMES: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "bool",
    timedelta: "duration",
}


def register_parser(target: type[T], parser: Callable[[str], T], name: str | None = None) -> None:
    """Register a parser for a type that cannot carry its own ``from_str``."""
    _PARSERS[target] = parser
    if name:
        _TYPE_NAMES[target] = name


def type_name(target: type) -> str:
    """Human readable name of a conversion target, used in error messages."""
    if target in _TYPE_NAMES:
        return _TYPE_NAMES[target]
    return getattr(target, "TYPE_NAME", target.__name__)


def parse_as(target: type[T], text: str, span: Span | None = None) -> T:
    """
    Convert text into ``target``.

    Raises:
        ConversionError: If the text is not a valid ``target``
        TypeError: If ``target`` does not take part in the protocol
    """
    parser = _PARSERS.get(target)
    if parser is None:
        parser = getattr(target, "from_str", None)
        if parser is None:
            raise TypeError(f"{target!r} cannot be parsed from configuration text")
    try:
        return parser(text)
    except ValueError as e:
        raise ConversionError(text, type_name(target), span, reason=str(e) or None) from e
