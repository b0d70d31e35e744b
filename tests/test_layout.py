"""Tests for astpos.layout module."""

import pytest

from astpos import layout
from astpos.context import NOT_IN_LIST
from astpos.syntax import BasicLit, CompositeLit, Ident, KeyValueExpr
from astpos.tokens import LitKind

THRESHOLD = 4


def _int(value: str) -> BasicLit:
    return BasicLit(kind=LitKind.INT, value=value)


def _ints(count: int) -> CompositeLit:
    return CompositeLit(elts=[_int(str(i)) for i in range(count)])


def _pair(value) -> KeyValueExpr:
    return KeyValueExpr(key=Ident(name="k"), value=value)


class TestNesting:
    """Test detection of nested literals."""

    def test_nested_element(self) -> None:
        """Test direct and key-value nesting."""
        assert layout.is_nested(CompositeLit())
        assert layout.is_nested(_pair(CompositeLit()))
        assert not layout.is_nested(_pair(_int("1")))
        assert not layout.is_nested(_int("1"))

    def test_has_nested_composite(self) -> None:
        """Test a literal with one nested element among scalars."""
        lit = CompositeLit(elts=[_int("1"), _pair(CompositeLit())])
        assert layout.has_nested_composite(lit)
        assert not layout.has_nested_composite(_ints(3))

    def test_count_key_values(self) -> None:
        """Test counting pairs among other elements."""
        lit = CompositeLit(elts=[_pair(_int("1")), _int("2"), _pair(_int("3"))])
        assert layout.count_key_values(lit) == 2


class TestBreaksElements:
    """Test breaks after '{' and before '}'."""

    @pytest.mark.parametrize(("count", "expected"), [(0, False), (3, False), (4, True)])
    def test_element_count(self, count: int, expected: bool) -> None:
        """Test the multi-line threshold on scalar elements."""
        assert layout.is_multi(_ints(count), THRESHOLD) is expected
        assert layout.breaks_elements(_ints(count), THRESHOLD) is expected

    def test_nested_breaks(self) -> None:
        """Test that one nested element is enough."""
        lit = CompositeLit(elts=[CompositeLit()])
        assert layout.breaks_elements(lit, THRESHOLD)

    def test_pairs(self) -> None:
        """Test that two pairs break but one does not."""
        one = CompositeLit(elts=[_pair(_int("1"))])
        two = CompositeLit(elts=[_pair(_int("1")), _pair(_int("2"))])
        assert not layout.breaks_elements(one, THRESHOLD)
        assert layout.breaks_elements(two, THRESHOLD)


class TestBreaksAfter:
    """Test breaks after '}' and after pair values."""

    @pytest.mark.parametrize(
        ("enclosing", "expected"),
        [(NOT_IN_LIST, False), (1, False), (2, True)],
    )
    def test_literal_in_list(self, enclosing: int, expected: bool) -> None:
        """Test that only literals with siblings end their line."""
        assert layout.breaks_after_literal(_ints(1), enclosing, THRESHOLD) is expected

    def test_multi_line_literal(self) -> None:
        """Test that a long literal always ends its line."""
        assert layout.breaks_after_literal(_ints(4), 1, THRESHOLD)

    @pytest.mark.parametrize(("index", "expected"), [(0, True), (2, True), (3, False)])
    def test_scalar_element(self, index: int, expected: bool) -> None:
        """Test that every scalar but the last ends its line."""
        assert layout.breaks_after_element(_int("1"), index, 4) is expected

    def test_elements_that_break_themselves(self) -> None:
        """Test that pairs and nested literals get no second break."""
        assert not layout.breaks_after_element(_pair(_int("1")), 0, 4)
        assert not layout.breaks_after_element(CompositeLit(), 0, 4)

    def test_pair_with_siblings(self) -> None:
        """Test that a scalar pair with siblings ends its line."""
        assert layout.breaks_after_pair(_pair(_int("1")), 2)
        assert not layout.breaks_after_pair(_pair(_int("1")), 1)

    def test_pair_with_literal_value(self) -> None:
        """Test that the nested literal ends the line instead."""
        assert not layout.breaks_after_pair(_pair(CompositeLit()), 2)
