"""Field classification for node classes."""

from __future__ import annotations

import types
from dataclasses import dataclass, fields
from enum import StrEnum
from functools import cache
from typing import Any, Union, get_args, get_origin, get_type_hints

from astpos.nodes import Node, Pos
from astpos.syntax import CommentGroup


class FieldKind(StrEnum):
    """Role a dataclass field plays in traversal and synthesis."""

    POSITION = "position"
    CHILD = "child"
    CHILDREN = "children"
    COMMENT = "comment"
    VALUE = "value"


@dataclass(frozen=True)
class FieldSchema:
    """Schema for a node field."""

    name: str
    kind: FieldKind


@dataclass(frozen=True)
class NodeSchema:
    """Complete schema for a node class."""

    tag: str
    fields: tuple[FieldSchema, ...]

    @property
    def positions(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.kind is FieldKind.POSITION)

    @property
    def children(self) -> tuple[FieldSchema, ...]:
        """Child node and child list fields, in source order."""
        return tuple(
            f for f in self.fields if f.kind in (FieldKind.CHILD, FieldKind.CHILDREN)
        )

    @property
    def comments(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.kind is FieldKind.COMMENT)


def _node_types(py_type: Any) -> tuple[type[Node], ...]:
    """Node classes named by an annotation, looking through unions."""
    if isinstance(py_type, types.UnionType) or get_origin(py_type) is Union:
        candidates = get_args(py_type)
    else:
        candidates = (py_type,)
    return tuple(
        c for c in candidates if isinstance(c, type) and issubclass(c, Node)
    )


def classify(py_type: Any) -> FieldKind:
    """Classify a field annotation.

    Comment groups are split out from ordinary children because they are
    positioned by the comment attacher, never by the generic walk.
    """
    if py_type is Pos:
        return FieldKind.POSITION

    if get_origin(py_type) is list:
        args = get_args(py_type)
        if not args:
            msg = "list type must have an element type"
            raise ValueError(msg)
        element_types = _node_types(args[0])
        if any(issubclass(t, CommentGroup) for t in element_types):
            return FieldKind.COMMENT
        return FieldKind.CHILDREN if element_types else FieldKind.VALUE

    node_types = _node_types(py_type)
    if any(issubclass(t, CommentGroup) for t in node_types):
        return FieldKind.COMMENT
    if node_types:
        return FieldKind.CHILD
    return FieldKind.VALUE


@cache
def node_schema(cls: type[Node]) -> NodeSchema:
    """Get schema for a node class."""
    hints = get_type_hints(cls)
    node_fields = (
        FieldSchema(name=f.name, kind=classify(hints[f.name]))
        for f in fields(cls)
        if not f.name.startswith("_")
    )
    return NodeSchema(tag=cls.tag, fields=tuple(node_fields))


def position_fields(cls: type[Node]) -> tuple[str, ...]:
    """Names of the position fields declared by a node class."""
    return node_schema(cls).positions


def all_schemas() -> dict[str, NodeSchema]:
    """Get all registered node schemas."""
    return {tag: node_schema(cls) for tag, cls in Node.registry.items()}
