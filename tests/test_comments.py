"""Tests for astpos.comments module."""

import pytest

from astpos.comments import CommentAttacher
from astpos.errors import SharedNodeError
from astpos.lines import PositionCounter
from astpos.syntax import Comment, CommentGroup


def _doc(*lines: str) -> CommentGroup:
    return CommentGroup(comments=[Comment(text=line) for line in lines])


@pytest.fixture
def counter() -> PositionCounter:
    return PositionCounter()


@pytest.fixture
def marks() -> list:
    return []


@pytest.fixture
def attacher(counter: PositionCounter, marks: list) -> CommentAttacher:
    def mark(node, name):
        marks.append((node, name, counter.current()))
        return counter.current()

    return CommentAttacher(counter, mark)


class TestCommentAttacher:
    """Test placement of doc comment groups."""

    def test_none_is_ignored(self, attacher: CommentAttacher, counter: PositionCounter) -> None:
        """Test that a missing doc comment changes nothing."""
        attacher.attach(None)

        assert attacher.groups == []
        assert counter.current() == 1

    def test_group_at_line_start(
        self,
        attacher: CommentAttacher,
        counter: PositionCounter,
        marks: list,
    ) -> None:
        """Test that each comment line is marked and ends its line."""
        group = _doc("// a", "// bc")
        attacher.attach(group)

        assert marks == [
            (group.comments[0], "slash", 1),
            (group.comments[1], "slash", 6),
        ]
        assert counter.lines.starts == (1, 5, 11)
        assert counter.current() == 12
        assert attacher.groups == [group]

    def test_group_mid_line(
        self,
        attacher: CommentAttacher,
        counter: PositionCounter,
        marks: list,
    ) -> None:
        """Test that a group never shares a line with preceding tokens."""
        counter.advance(3)
        group = _doc("// a")
        attacher.attach(group)

        assert marks == [(group.comments[0], "slash", 5)]
        assert counter.lines.starts == (1, 4, 9)

    def test_groups_kept_in_order(self, attacher: CommentAttacher) -> None:
        """Test that groups are listed in attachment order."""
        first, second = _doc("// 1"), _doc("// 2")
        attacher.attach(first)
        attacher.attach(second)

        assert attacher.groups == [first, second]

    def test_group_attached_twice(self, attacher: CommentAttacher) -> None:
        """Test that a group documenting two nodes is rejected."""
        group = _doc("// shared")
        attacher.attach(group)

        with pytest.raises(SharedNodeError):
            attacher.attach(group)
