"""Generic pre-order traversal of syntax trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from astpos.nodes import Node
from astpos.schema import FieldKind, node_schema

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


def iter_children(node: Node, *, comments: bool = False) -> Iterator[Node]:
    """Yield the direct children of a node in source order.

    Comment groups are skipped unless `comments` is set. Absent optional
    children are skipped.
    """
    for f in node_schema(type(node)).fields:
        if f.kind is FieldKind.COMMENT and not comments:
            continue
        if f.kind not in (FieldKind.CHILD, FieldKind.CHILDREN, FieldKind.COMMENT):
            continue
        value = getattr(node, f.name)
        if value is None:
            continue
        if isinstance(value, list):
            yield from (child for child in value if child is not None)
        else:
            yield value


def iter_nodes(root: Node, *, comments: bool = False) -> Iterator[Node]:
    """Yield every node of the tree in pre-order, starting with `root`."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(iter_children(node, comments=comments))))


def inspect(root: Node, visit: Callable[[Node], bool]) -> None:
    """Call `visit` for each node in pre-order.

    Children of a node are only visited when `visit` returns True for it.
    """
    if visit(root):
        for child in iter_children(root):
            inspect(child, visit)
