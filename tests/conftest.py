"""Shared pytest fixtures for widgetconf tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from widgetconf.core.ast import SymbolNode
from widgetconf.core.ir import AttrSpec, Config, WindowDefinition
from widgetconf.core.loader import load_config
from widgetconf.core.location import Span

BAR_CONFIG = """
; status bar configuration
(defvar volume "50")
(defvar locale :per_window true "en")
(defpoll time :interval "1s" :initial "00:00" "date +%H:%M")
(deflisten workspaces :initial "[]" "scripts/workspaces.sh")

(defwindow bar [id ?screen label ?icon]
  :monitor 0
  :geometry (geometry :x "0" :y "0" :width "100%" :height "30px" :anchor "top center")
  :stacking "fg"
  :exclusive true
  (box label))

(defwindow popup
  :monitor "HDMI-1"
  (label "hello"))
"""


@pytest.fixture
def span() -> Span:
    return Span(file="test.wconf", start=0, end=0, line=1, column=1)


@pytest.fixture
def make_window(span: Span) -> Callable[..., WindowDefinition]:
    """Return a factory building a window that expects (name, optional) pairs."""

    def factory(name: str, *args: tuple[str, bool]) -> WindowDefinition:
        return WindowDefinition(
            name=name,
            expected_args=[
                AttrSpec(name=arg, optional=optional, span=span) for arg, optional in args
            ],
            widget=SymbolNode(span=span, name="box"),
            span=span,
        )

    return factory


@pytest.fixture
def bar_config_text() -> str:
    return BAR_CONFIG


@pytest.fixture
def bar_config() -> Config:
    """Return the parsed sample bar configuration."""
    return load_config(BAR_CONFIG, "bar.wconf")


@pytest.fixture
def bar_config_file(tmp_path: Path) -> Path:
    """Write the sample configuration to a temporary file."""
    path = tmp_path / "widgets.wconf"
    path.write_text(BAR_CONFIG, encoding="utf-8")
    return path
