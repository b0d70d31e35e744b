"""Placement of documentation comment groups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from astpos.errors import SharedNodeError

if TYPE_CHECKING:
    from collections.abc import Callable

    from astpos.lines import PositionCounter
    from astpos.nodes import Node, Pos
    from astpos.syntax import CommentGroup

type Mark = Callable[[Node, str], Pos]


class CommentAttacher:
    """Positions doc comments on the lines directly above their owner.

    Only comments reached through a documentation anchor (file, declaration,
    spec or field) are positioned. End-of-line and free-floating comments are
    not, and a renderer will misplace them.
    """

    def __init__(self, counter: PositionCounter, mark: Mark) -> None:
        self.counter = counter
        self.mark = mark
        self.groups: list[CommentGroup] = []
        self._seen: set[int] = set()

    def attach(self, group: CommentGroup | None) -> None:
        """Register `group` and give each of its lines its own line start."""
        if group is None:
            return
        if id(group) in self._seen:
            msg = "Comment group is attached to more than one node"
            raise SharedNodeError(msg)
        self._seen.add(id(group))
        self.groups.append(group)

        if not self.counter.at_line_start():
            self.counter.newline()
        for comment in group.comments:
            self.mark(comment, "slash")
            self.counter.advance(len(comment.text))
            self.counter.newline()
