"""Stack of sibling-list frames visited during traversal."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

NOT_IN_LIST = -1


@dataclass
class ListFrame:
    """Size of a sibling list and the index of the element being visited."""

    size: int
    index: int = 0

    def advance(self) -> None:
        self.index += 1


class ListContext:
    """Innermost-first view of the sibling lists currently being traversed.

    Lists nest (a list element may itself contain a list), so frames are kept
    on a stack and layout rules only ever look at the innermost one.
    """

    def __init__(self) -> None:
        self._frames: list[ListFrame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def current(self) -> ListFrame | None:
        return self._frames[-1] if self._frames else None

    def push(self, size: int) -> ListFrame:
        frame = ListFrame(size=size)
        self._frames.append(frame)
        return frame

    def pop(self) -> ListFrame:
        if not self._frames:
            msg = "No list frame to pop"
            raise IndexError(msg)
        return self._frames.pop()

    @contextmanager
    def entered(self, size: int) -> Iterator[ListFrame]:
        """Push a frame for the duration of a list visit."""
        frame = self.push(size)
        yield frame
        self.pop()

    def size(self) -> int:
        """Size of the innermost list, or NOT_IN_LIST outside of any list."""
        frame = self.current
        return frame.size if frame is not None else NOT_IN_LIST

    def index(self) -> int:
        """Index within the innermost list, or NOT_IN_LIST outside of any list."""
        frame = self.current
        return frame.index if frame is not None else NOT_IN_LIST
