"""
Geometric value types: numbers with units and coordinate pairs.

Examples:
    - 10px, 10 (pixels)
    - 50%, 12.5% (percent of the monitor dimension)
    - 10x20, 50%x30px (coordinates)
"""

from __future__ import annotations

import math
import re
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

_NUM_WITH_UNIT_RE = re.compile(r"(-?[0-9]+(?:\.[0-9]+)?)(px|%)?")
_COORDS_RE = re.compile(
    r"\s*(-?[0-9]+(?:\.[0-9]+)?(?:px|%)?)\s*[xX*]\s*(-?[0-9]+(?:\.[0-9]+)?(?:px|%)?)\s*"
)


class NumUnit(StrEnum):
    """Units a geometric number can carry."""

    PIXELS = "px"
    PERCENT = "%"


class NumWithUnit(BaseModel):
    """A pixel count or a percentage of the relevant monitor dimension."""

    TYPE_NAME: ClassVar[str] = "number with unit"

    value: float = Field(description="Magnitude; whole number for pixels")
    unit: NumUnit = NumUnit.PIXELS

    model_config = ConfigDict(frozen=True)

    @classmethod
    def pixels(cls, value: int) -> NumWithUnit:
        return cls(value=value, unit=NumUnit.PIXELS)

    @classmethod
    def percent(cls, value: float) -> NumWithUnit:
        return cls(value=value, unit=NumUnit.PERCENT)

    @classmethod
    def from_str(cls, text: str) -> NumWithUnit:
        match = _NUM_WITH_UNIT_RE.fullmatch(text.strip())
        if not match:
            raise ValueError("expected a number optionally followed by px or %")
        number, unit = match.groups()
        if not math.isfinite(float(number)):
            raise ValueError("number out of range")
        if unit == "%":
            return cls.percent(float(number))
        if "." in number:
            raise ValueError("pixel values must be whole numbers")
        return cls.pixels(int(number))

    def relative_to(self, max_size: int) -> int:
        """Absolute pixel value, resolving percentages against max_size."""
        if self.unit == NumUnit.PERCENT:
            return int(max_size / 100.0 * self.value)
        return int(self.value)

    def __str__(self) -> str:
        value = int(self.value) if self.value.is_integer() else self.value
        return f"{value}{self.unit.value}"


class Coords(BaseModel):
    """
    A pair of NumWithUnit values, written ``XxY``.

    Examples:
        - 10x20
        - 50%x30px
    """

    TYPE_NAME: ClassVar[str] = "coords"

    x: NumWithUnit
    y: NumWithUnit

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_pixels(cls, x: int, y: int) -> Coords:
        return cls(x=NumWithUnit.pixels(x), y=NumWithUnit.pixels(y))

    @classmethod
    def from_str(cls, text: str) -> Coords:
        match = _COORDS_RE.fullmatch(text)
        if not match:
            raise ValueError("expected coordinates in the form XxY, e.g. 10x20 or 50%x30px")
        return cls(x=NumWithUnit.from_str(match.group(1)), y=NumWithUnit.from_str(match.group(2)))

    def relative_to(self, width: int, height: int) -> tuple[int, int]:
        return self.x.relative_to(width), self.y.relative_to(height)

    def __str__(self) -> str:
        return f"{self.x}x{self.y}"
