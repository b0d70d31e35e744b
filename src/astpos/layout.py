"""Line-break heuristics for composite literals and key-value pairs.

The rules replicate gofmt's habits rather than a general principle: short
flat data stays on one line, nested or long data gets its elements moved off
the delimiter lines. They are kept as pure functions of the node and its
place in the enclosing sibling list so they can be checked without a
traversal.
"""

from __future__ import annotations

from astpos.syntax import CompositeLit, Expr, KeyValueExpr


def is_nested(element: Expr) -> bool:
    """Whether a literal element is, or carries as its value, a composite literal."""
    if isinstance(element, CompositeLit):
        return True
    return isinstance(element, KeyValueExpr) and isinstance(element.value, CompositeLit)


def has_nested_composite(lit: CompositeLit) -> bool:
    return any(is_nested(element) for element in lit.elts)


def count_key_values(lit: CompositeLit) -> int:
    return sum(1 for element in lit.elts if isinstance(element, KeyValueExpr))


def is_multi(lit: CompositeLit, threshold: int) -> bool:
    return len(lit.elts) >= threshold


def breaks_elements(lit: CompositeLit, threshold: int) -> bool:
    """Whether to break lines after ``{`` and before ``}``."""
    return (
        has_nested_composite(lit)
        or is_multi(lit, threshold)
        or count_key_values(lit) > 1
    )


def breaks_after_element(element: Expr, index: int, size: int) -> bool:
    """Whether to break the line after an element of a multi-line literal.

    Pairs and nested literals end their own lines, and the last element is
    followed by the break before ``}``.
    """
    if isinstance(element, KeyValueExpr) or is_nested(element):
        return False
    return index < size - 1


def breaks_after_literal(lit: CompositeLit, enclosing_size: int, threshold: int) -> bool:
    """Whether to break the line after the closing ``}``.

    `enclosing_size` is the size of the sibling list the literal sits in,
    negative outside of any list.
    """
    return is_multi(lit, threshold) or enclosing_size > 1


def breaks_after_pair(pair: KeyValueExpr, enclosing_size: int) -> bool:
    """Whether to break the line after a key-value pair's value."""
    return enclosing_size > 1 and not isinstance(pair.value, CompositeLit)
