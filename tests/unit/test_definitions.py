"""
Tests for configuration entity parsing.

Tests cover:
- defvar with and without attributes, usage hints on errors
- defpoll / deflisten script variables
- defwindow parameter lists, attributes and geometry
"""

from datetime import timedelta

import pytest

from widgetconf.core.ast import ListNode
from widgetconf.core.ast_parser import parse_forms
from widgetconf.core.dynval import DynVal
from widgetconf.core.errors import ConversionError, ParseError
from widgetconf.core.ir import (
    AnchorAlignment,
    AnchorPoint,
    ListenScriptVar,
    NamedMonitor,
    NumericMonitor,
    PollScriptVar,
    VarDefinition,
    WindowDefinition,
    WindowGeometry,
    WindowStacking,
)
from widgetconf.core.values import Coords, NumWithUnit


def parse_one(source: str):
    (form,) = parse_forms(source, "test.wconf")
    return form


# =============================================================================
# defvar
# =============================================================================


class TestVarDefinition:
    """Test (defvar name "initial-value")."""

    def test_basic(self):
        var = VarDefinition.from_ast(parse_one('(defvar volume "50")'))
        assert var.name == "volume"
        assert var.initial_value == DynVal("50")
        assert var.per_window is False
        assert var.span.start == 0

    def test_per_window(self):
        var = VarDefinition.from_ast(parse_one('(defvar locale :per_window true "en")'))
        assert var.per_window is True
        assert var.initial_value == DynVal("en")

    def test_numeric_initial_value(self):
        var = VarDefinition.from_ast(parse_one("(defvar count 0)"))
        assert var.initial_value.as_int() == 0

    def test_missing_initial_value_has_usage_hint(self):
        with pytest.raises(ParseError) as exc_info:
            VarDefinition.from_ast(parse_one("(defvar volume)"))
        error = exc_info.value
        assert error.element == "defvar"
        assert error.hints == ['Expected format: `(defvar name "initial-value")`']
        assert "Expected format" in str(error)

    def test_extra_child_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            VarDefinition.from_ast(parse_one('(defvar volume "50" "60")'))
        assert "Expected the end of the form" in exc_info.value.message

    def test_name_must_be_symbol(self):
        with pytest.raises(ParseError) as exc_info:
            VarDefinition.from_ast(parse_one('(defvar "volume" "50")'))
        assert "Expected a symbol" in exc_info.value.message

    def test_wrong_tag(self):
        with pytest.raises(ParseError) as exc_info:
            VarDefinition.from_ast(parse_one('(defpoll volume "50")'))
        assert "Expected element `defvar`, but found `defpoll`" in exc_info.value.message

    def test_not_a_list(self):
        with pytest.raises(ParseError):
            VarDefinition.from_ast(parse_one("defvar"))

    def test_invalid_per_window_has_usage_hint(self):
        with pytest.raises(ConversionError) as exc_info:
            VarDefinition.from_ast(parse_one('(defvar locale :per_window "maybe" "en")'))
        error = exc_info.value
        assert error.key == ":per_window"
        assert error.hints == ['Expected format: `(defvar name "initial-value")`']
        assert "note: Expected format" in str(error)


# =============================================================================
# defpoll / deflisten
# =============================================================================


class TestScriptVars:
    """Test script-backed variable definitions."""

    def test_defpoll(self):
        var = PollScriptVar.from_ast(
            parse_one('(defpoll time :interval "1s" :initial "00:00" "date +%H:%M")')
        )
        assert var.name == "time"
        assert var.interval == timedelta(seconds=1)
        assert var.initial_value == DynVal("00:00")
        assert var.command == "date +%H:%M"
        assert var.run_while is True

    def test_defpoll_run_while(self):
        var = PollScriptVar.from_ast(
            parse_one('(defpoll cpu :interval "500ms" :run-while false "cpu.sh")')
        )
        assert var.run_while is False
        assert var.initial_value is None

    def test_defpoll_requires_interval(self):
        with pytest.raises(ParseError) as exc_info:
            PollScriptVar.from_ast(parse_one('(defpoll time "date")'))
        assert "Missing attribute :interval" in exc_info.value.message
        assert exc_info.value.hints

    def test_defpoll_invalid_interval(self):
        with pytest.raises(ConversionError) as exc_info:
            PollScriptVar.from_ast(parse_one('(defpoll time :interval "10" "date")'))
        assert exc_info.value.target == "duration"

    def test_defpoll_interval_out_of_range(self):
        with pytest.raises(ConversionError) as exc_info:
            PollScriptVar.from_ast(parse_one('(defpoll time :interval "99999999999h" "date")'))
        assert exc_info.value.key == ":interval"
        assert exc_info.value.reason == "duration out of range"

    def test_deflisten(self):
        var = ListenScriptVar.from_ast(parse_one('(deflisten ws :initial "[]" "ws.sh")'))
        assert var.name == "ws"
        assert var.command == "ws.sh"
        assert var.initial_value.as_json() == []


# =============================================================================
# defwindow
# =============================================================================


class TestWindowDefinition:
    """Test (defwindow name [args] :attrs widget)."""

    def test_expected_args(self):
        window = WindowDefinition.from_ast(parse_one("(defwindow bar [id ?screen label] (box))"))
        assert [(arg.name, arg.optional) for arg in window.expected_args] == [
            ("id", False),
            ("screen", True),
            ("label", False),
        ]
        assert window.expected_arg_names() == ["id", "screen", "label"]

    def test_no_arg_list(self):
        window = WindowDefinition.from_ast(parse_one("(defwindow popup (box))"))
        assert window.expected_args == []
        assert isinstance(window.widget, ListNode)

    def test_defaults(self):
        window = WindowDefinition.from_ast(parse_one("(defwindow popup (box))"))
        assert window.monitor is None
        assert window.geometry is None
        assert window.stacking == WindowStacking.FOREGROUND
        assert window.exclusive is False
        assert window.focusable is False
        assert window.resizable is True

    def test_attributes(self):
        window = WindowDefinition.from_ast(
            parse_one(
                '(defwindow bar :monitor "HDMI-1" :stacking "overlay" '
                ":exclusive true :focusable true :resizable false (box))"
            )
        )
        assert window.monitor == NamedMonitor(name="HDMI-1")
        assert window.stacking == WindowStacking.OVERLAY
        assert window.exclusive is True
        assert window.focusable is True
        assert window.resizable is False

    def test_numeric_monitor(self):
        window = WindowDefinition.from_ast(parse_one("(defwindow bar :monitor 1 (box))"))
        assert window.monitor == NumericMonitor(index=1)

    def test_geometry(self):
        window = WindowDefinition.from_ast(
            parse_one(
                '(defwindow bar :geometry (geometry :x "10px" :y "5%" :width "100%" '
                ':height "30px" :anchor "top center") (box))'
            )
        )
        assert window.geometry == WindowGeometry(
            anchor_point=AnchorPoint(x=AnchorAlignment.CENTER, y=AnchorAlignment.START),
            offset=Coords(x=NumWithUnit.pixels(10), y=NumWithUnit.percent(5)),
            size=Coords(x=NumWithUnit.percent(100), y=NumWithUnit.pixels(30)),
        )

    def test_partial_geometry_uses_defaults(self):
        window = WindowDefinition.from_ast(
            parse_one('(defwindow bar :geometry (geometry :height "30px") (box))')
        )
        assert window.geometry.size == Coords(x=NumWithUnit.percent(100), y=NumWithUnit.pixels(30))
        assert window.geometry.offset == Coords.from_pixels(0, 0)
        assert window.geometry.anchor_point == AnchorPoint()

    def test_geometry_error_carries_geometry_hint(self):
        with pytest.raises(ParseError) as exc_info:
            WindowDefinition.from_ast(
                parse_one('(defwindow bar :geometry (geometry "oops") (box))')
            )
        hints = exc_info.value.hints
        assert any("(geometry" in hint for hint in hints)
        assert any("(defwindow" in hint for hint in hints)

    def test_widget_required(self):
        with pytest.raises(ParseError) as exc_info:
            WindowDefinition.from_ast(parse_one("(defwindow bar [a])"))
        assert "but the form ended" in exc_info.value.message

    def test_only_one_widget(self):
        with pytest.raises(ParseError):
            WindowDefinition.from_ast(parse_one("(defwindow bar (box) (box))"))

    def test_parameter_must_be_symbol(self):
        with pytest.raises(ParseError) as exc_info:
            WindowDefinition.from_ast(parse_one('(defwindow bar ["a"] (box))'))
        assert "Expected a parameter name" in exc_info.value.message

    def test_duplicate_parameter(self):
        with pytest.raises(ParseError) as exc_info:
            WindowDefinition.from_ast(parse_one("(defwindow bar [a ?a] (box))"))
        assert "Parameter 'a' declared twice" in exc_info.value.message

    def test_bare_question_mark(self):
        with pytest.raises(ParseError):
            WindowDefinition.from_ast(parse_one("(defwindow bar [?] (box))"))

    def test_invalid_stacking(self):
        with pytest.raises(ConversionError):
            WindowDefinition.from_ast(parse_one('(defwindow bar :stacking "middle" (box))'))
