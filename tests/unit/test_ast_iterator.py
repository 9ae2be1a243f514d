"""
Tests for AstIterator, Attributes and the element protocol.
"""

from datetime import timedelta

import pytest

from widgetconf.core.ast import ListNode, LiteralNode
from widgetconf.core.ast_iterator import AstIterator
from widgetconf.core.ast_parser import parse_forms
from widgetconf.core.dynval import DynVal
from widgetconf.core.errors import ConversionError, ParseError
from widgetconf.core.from_ast import element_tag
from widgetconf.core.values import Coords


def iterate(source: str) -> AstIterator:
    """Iterator over the children of a single form, tag included."""
    (form,) = parse_forms(source)
    assert isinstance(form, ListNode)
    return AstIterator(form.span, form.children, element="test")


class TestExpect:
    """Test the typed expect operations."""

    def test_expect_symbol(self):
        it = iterate("(foo bar)")
        assert it.expect_symbol()[1] == "foo"
        assert it.expect_symbol()[1] == "bar"
        it.expect_done()

    def test_expect_symbol_mismatch(self):
        it = iterate('("foo")')
        with pytest.raises(ParseError) as exc_info:
            it.expect_symbol()
        error = exc_info.value
        assert "Expected a symbol, but found a literal" in error.message
        assert error.element == "test"
        assert error.span.column == 2

    def test_expect_on_exhausted_form(self):
        it = iterate("(foo)")
        it.expect_symbol()
        with pytest.raises(ParseError) as exc_info:
            it.expect_literal()
        assert "Expected a literal value, but the form ended" in exc_info.value.message

    def test_failed_expect_does_not_advance(self):
        it = iterate('(foo "bar")')
        with pytest.raises(ParseError):
            it.expect_literal()
        assert it.expect_symbol()[1] == "foo"

    def test_expect_literal(self):
        it = iterate('(42 "text" true)')
        assert it.expect_literal()[1] == DynVal("42")
        assert it.expect_literal()[1] == DynVal("text")
        assert it.expect_literal()[1] == DynVal("true")

    def test_literal_always_carries_value(self, span):
        with pytest.raises(TypeError):
            LiteralNode(span=span)
        it = iterate('("")')
        assert it.expect_literal()[1] == DynVal("")

    def test_expect_array(self):
        it = iterate("([a b])")
        _, children = it.expect_array()
        assert [child.name for child in children] == ["a", "b"]

    def test_expect_any(self):
        it = iterate("((nested))")
        assert isinstance(it.expect_any(), ListNode)

    def test_expect_done_with_leftover(self):
        it = iterate("(foo extra)")
        it.expect_symbol()
        with pytest.raises(ParseError) as exc_info:
            it.expect_done()
        assert "Expected the end of the form, but found a symbol `extra`" in exc_info.value.message

    def test_iteration_consumes(self):
        it = iterate("(a b c)")
        it.expect_symbol()
        assert [str(node) for node in it] == ["b", "c"]
        it.expect_done()


class TestKeyValues:
    """Test attribute blocks."""

    def test_empty_block(self):
        it = iterate('("value")')
        attrs = it.expect_key_values()
        assert len(attrs) == 0
        assert it.expect_literal()[1] == DynVal("value")

    def test_block_stops_at_non_keyword(self):
        it = iterate('(:a "1" :b 2 "tail")')
        attrs = it.expect_key_values()
        assert attrs.keys() == ["a", "b"]
        assert it.expect_literal()[1] == DynVal("tail")

    def test_missing_value(self):
        it = iterate("(:a)")
        with pytest.raises(ParseError) as exc_info:
            it.expect_key_values()
        assert "Missing value for attribute :a" in exc_info.value.message

    def test_keyword_as_value(self):
        it = iterate('(:a :b "1")')
        with pytest.raises(ParseError):
            it.expect_key_values()

    def test_duplicate_attribute(self):
        it = iterate('(:a "1" :a "2")')
        with pytest.raises(ParseError) as exc_info:
            it.expect_key_values()
        assert "given more than once" in exc_info.value.message

    def test_primitive_required_and_optional(self):
        attrs = iterate('(:interval "1s" :pos "1x2")').expect_key_values()
        assert attrs.primitive_required("interval", timedelta) == timedelta(seconds=1)
        assert attrs.primitive_optional("pos", Coords) == Coords.from_pixels(1, 2)
        assert attrs.primitive_optional("missing", Coords) is None

    def test_primitive_required_missing(self):
        attrs = iterate('(:a "1")').expect_key_values()
        with pytest.raises(ParseError) as exc_info:
            attrs.primitive_required("interval", timedelta)
        assert "Missing attribute :interval" in exc_info.value.message

    def test_primitive_conversion_error(self):
        attrs = iterate('(:interval "often")').expect_key_values()
        with pytest.raises(ConversionError) as exc_info:
            attrs.primitive_optional("interval", timedelta)
        assert exc_info.value.key == ":interval"
        assert exc_info.value.value == "often"

    def test_primitive_needs_literal(self):
        attrs = iterate("(:geometry (geometry))").expect_key_values()
        with pytest.raises(ParseError) as exc_info:
            attrs.primitive_optional("geometry", str)
        assert "Expected a literal value for attribute :geometry" in exc_info.value.message

    def test_ast_required(self):
        attrs = iterate("(:geometry (geometry))").expect_key_values()
        assert isinstance(attrs.ast_required("geometry"), ListNode)
        assert attrs.ast_optional("other") is None
        with pytest.raises(ParseError):
            attrs.ast_required("other")

    def test_dynval_required(self):
        attrs = iterate('(:initial "0" :widget (box))').expect_key_values()
        assert attrs.dynval_required("initial") == DynVal("0")
        with pytest.raises(ParseError):
            attrs.dynval_required("other")
        with pytest.raises(ParseError):
            attrs.dynval_required("widget")

    def test_flag(self):
        attrs = iterate('(:on true :off "false")').expect_key_values()
        assert attrs.flag("on") is True
        assert attrs.flag("off", True) is False
        assert attrs.flag("absent", True) is True
        assert attrs.flag("absent") is False

    def test_flag_rejects_non_boolean(self):
        attrs = iterate('(:on "yes")').expect_key_values()
        with pytest.raises(ConversionError):
            attrs.flag("on")


class TestElementTag:
    def test_tag_of_form(self):
        (form,) = parse_forms("(defvar a 1)")
        assert element_tag(form) == "defvar"

    @pytest.mark.parametrize("source", ['"x"', "()", '("x")', "[defvar]"])
    def test_no_tag(self, source):
        (form,) = parse_forms(source)
        assert element_tag(form) is None
