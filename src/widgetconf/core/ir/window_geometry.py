"""
Window placement types: anchor points, stacking and geometry.

Examples:
    (geometry :x "10px" :y "0" :width "50%" :height "30px" :anchor "top center")
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..ast_iterator import AstIterator
from ..from_ast import FromAstElementContent
from ..location import Span
from ..values import Coords, NumWithUnit

T = TypeVar("T")


class AnchorAlignment(StrEnum):
    """Alignment along one axis."""

    START = "start"
    CENTER = "center"
    END = "end"

    def x_name(self) -> str:
        return {
            AnchorAlignment.START: "left",
            AnchorAlignment.CENTER: "center",
            AnchorAlignment.END: "right",
        }[self]

    def y_name(self) -> str:
        return {
            AnchorAlignment.START: "top",
            AnchorAlignment.CENTER: "center",
            AnchorAlignment.END: "bottom",
        }[self]


_X_NAMES = {
    "l": AnchorAlignment.START,
    "left": AnchorAlignment.START,
    "c": AnchorAlignment.CENTER,
    "center": AnchorAlignment.CENTER,
    "r": AnchorAlignment.END,
    "right": AnchorAlignment.END,
}

_Y_NAMES = {
    "t": AnchorAlignment.START,
    "top": AnchorAlignment.START,
    "c": AnchorAlignment.CENTER,
    "center": AnchorAlignment.CENTER,
    "b": AnchorAlignment.END,
    "bottom": AnchorAlignment.END,
}


class AnchorPoint(BaseModel):
    """
    Point of the window attached to the same point of the monitor.

    Examples:
        - center
        - top left, left top
        - bottom (horizontally centered)
    """

    TYPE_NAME: ClassVar[str] = "anchor point"

    x: AnchorAlignment = AnchorAlignment.START
    y: AnchorAlignment = AnchorAlignment.START

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_str(cls, text: str) -> AnchorPoint:
        words = text.strip().lower().split()
        if len(words) == 1:
            word = words[0]
            if word in ("c", "center"):
                return cls(x=AnchorAlignment.CENTER, y=AnchorAlignment.CENTER)
            if word in _Y_NAMES:
                return cls(x=AnchorAlignment.CENTER, y=_Y_NAMES[word])
            if word in _X_NAMES:
                return cls(x=_X_NAMES[word], y=AnchorAlignment.CENTER)
        elif len(words) == 2:
            first, second = words
            if first in _Y_NAMES and second in _X_NAMES:
                return cls(x=_X_NAMES[second], y=_Y_NAMES[first])
            if first in _X_NAMES and second in _Y_NAMES:
                return cls(x=_X_NAMES[first], y=_Y_NAMES[second])
        raise ValueError("expected e.g. `center`, `top left` or `bottom right`")

    def __str__(self) -> str:
        if self.x == self.y == AnchorAlignment.CENTER:
            return "center"
        return f"{self.y.y_name()} {self.x.x_name()}"


class WindowStacking(StrEnum):
    """Layer a window is placed on."""

    FOREGROUND = "fg"
    BACKGROUND = "bg"
    OVERLAY = "overlay"
    BOTTOM = "bottom"

    @classmethod
    def from_str(cls, text: str) -> WindowStacking:
        name = text.strip().lower()
        aliases = {"foreground": "fg", "background": "bg"}
        try:
            return cls(aliases.get(name, name))
        except ValueError:
            raise ValueError("expected one of fg, bg, overlay, bottom") from None


class WindowGeometry(BaseModel, FromAstElementContent):
    """Anchor, offset and size of a window relative to its monitor."""

    ELEMENT_NAME: ClassVar[str] = "geometry"
    USAGE: ClassVar[str | None] = (
        '(geometry :x "0" :y "0" :width "100%" :height "30px" :anchor "top center")'
    )

    anchor_point: AnchorPoint = Field(default_factory=AnchorPoint)
    offset: Coords = Field(default_factory=lambda: Coords.from_pixels(0, 0))
    size: Coords = Field(
        default_factory=lambda: Coords(x=NumWithUnit.percent(100), y=NumWithUnit.percent(100))
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tail(cls, span: Span, iterator: AstIterator) -> WindowGeometry:
        attrs = iterator.expect_key_values()
        iterator.expect_done()
        default = cls()

        def read(key: str, target: type[T], fallback: T) -> T:
            value = attrs.primitive_optional(key, target)
            return fallback if value is None else value

        return cls(
            anchor_point=read("anchor", AnchorPoint, default.anchor_point),
            offset=Coords(
                x=read("x", NumWithUnit, default.offset.x),
                y=read("y", NumWithUnit, default.offset.y),
            ),
            size=Coords(
                x=read("width", NumWithUnit, default.size.x),
                y=read("height", NumWithUnit, default.size.y),
            ),
        )

    def override(
        self,
        pos: Coords | None = None,
        size: Coords | None = None,
        anchor: AnchorPoint | None = None,
    ) -> WindowGeometry:
        """Copy with any given override replacing the configured value."""
        return WindowGeometry(
            anchor_point=anchor if anchor is not None else self.anchor_point,
            offset=pos if pos is not None else self.offset,
            size=size if size is not None else self.size,
        )
