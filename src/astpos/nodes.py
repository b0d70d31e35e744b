"""Core syntax node infrastructure with automatic registration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, dataclass_transform

type Pos = int
"""Synthetic offset of a token. Only the ordering of offsets is meaningful."""

NO_POS: Pos = 0


@dataclass(eq=False, kw_only=True)
@dataclass_transform(eq_default=False, kw_only_default=True)
class Node:
    """Base for syntax nodes.

    Nodes are mutable so that their position fields can be filled in place,
    and compare by identity so a traversal can tell two equal-looking
    subtrees apart.
    """

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Node]]] = {}

    def __init_subclass__(cls, tag: str | None = None, abstract: bool = False) -> None:
        """Register node subclass with automatic tag derivation."""
        dataclass(eq=False, kw_only=True)(cls)
        if abstract:
            return
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := Node.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Node.registry[cls.tag] = cls

    def expects(self, name: str) -> bool:
        """Whether the position field `name` must be assigned for this node.

        Nodes with optional tokens override this and key it off the flag that
        says whether the token is present.
        """
        return True

    def pos(self) -> Pos:
        """Offset of the node's first token."""
        raise NotImplementedError

    def end(self) -> Pos:
        """Offset immediately after the node's last token."""
        raise NotImplementedError
