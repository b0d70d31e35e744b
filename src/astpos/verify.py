"""Checks on positioned trees, for callers that want to validate before rendering."""

from __future__ import annotations

from astpos.nodes import NO_POS, Node
from astpos.schema import position_fields
from astpos.walk import iter_children, iter_nodes


def missing_positions(root: Node) -> list[tuple[Node, str]]:
    """Mandatory position fields that still hold no position.

    Comments reachable through doc anchors are included.
    """
    missing: list[tuple[Node, str]] = []
    seen: set[int] = set()
    for node in iter_nodes(root, comments=True):
        if id(node) in seen:
            continue
        seen.add(id(node))
        for name in position_fields(type(node)):
            if node.expects(name) and getattr(node, name) <= NO_POS:
                missing.append((node, name))
    return missing


def span_violations(root: Node) -> list[tuple[Node, Node]]:
    """Parent/child pairs where the child's span is not inside the parent's.

    Doc comments are left out: they sit directly above their owner.
    """
    violations: list[tuple[Node, Node]] = []
    for parent in iter_nodes(root):
        for child in iter_children(parent):
            if child.pos() < parent.pos() or child.end() > parent.end():
                violations.append((parent, child))
    return violations
