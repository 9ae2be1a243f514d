"""
Monitor identifiers.

A monitor is selected either by its numeric index or by its connector name.
Text that parses as an integer is always an index, even if a monitor happens
to carry a numeric name.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..dynval import DynVal
from ..typed_parse import parse_int


class MonitorIdentifier(BaseModel):
    """Base of the two monitor identifier variants; parse with ``from_str``."""

    TYPE_NAME: ClassVar[str] = "monitor identifier"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_str(cls, text: str) -> NumericMonitor | NamedMonitor:
        try:
            return NumericMonitor(index=parse_int(text))
        except ValueError:
            return NamedMonitor(name=text)

    @classmethod
    def from_dynval(cls, value: DynVal) -> NumericMonitor | NamedMonitor:
        return cls.from_str(value.text)

    @property
    def is_numeric(self) -> bool:
        return isinstance(self, NumericMonitor)

    def to_dynval(self) -> DynVal:
        return DynVal(str(self))


class NumericMonitor(MonitorIdentifier):
    """Monitor selected by index."""

    kind: Literal["numeric"] = "numeric"
    index: int

    def __str__(self) -> str:
        return str(self.index)


class NamedMonitor(MonitorIdentifier):
    """Monitor selected by name (e.g. ``HDMI-1``)."""

    kind: Literal["name"] = "name"
    name: str

    def __str__(self) -> str:
        return self.name


AnyMonitor = Annotated[NumericMonitor | NamedMonitor, Field(discriminator="kind")]
