"""Position counter and line-start table."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import TYPE_CHECKING

from astpos.nodes import NO_POS, Pos

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True)
class Position:
    """Line and column of an offset, both 1-based."""

    offset: Pos
    line: int
    column: int

    def format(self) -> str:
        return f"{self.line}:{self.column}"


class LineTable:
    """Strictly increasing offsets at which lines start.

    The first line starts at the base offset, so the table is never empty.
    """

    def __init__(self, base: Pos = 1) -> None:
        if base <= NO_POS:
            msg = f"Line table base must be greater than {NO_POS}, got {base}"
            raise ValueError(msg)
        self._starts: list[Pos] = [base]

    @classmethod
    def from_starts(cls, starts: Iterable[Pos]) -> LineTable:
        """Rebuild a table from previously recorded line starts."""
        first, *rest = list(starts) or [NO_POS]
        table = cls(first)
        for start in rest:
            table.add_line(start)
        return table

    @property
    def base(self) -> Pos:
        return self._starts[0]

    @property
    def starts(self) -> tuple[Pos, ...]:
        return tuple(self._starts)

    def __len__(self) -> int:
        return len(self._starts)

    def __iter__(self) -> Iterator[Pos]:
        return iter(self._starts)

    def __repr__(self) -> str:
        return f"LineTable({self._starts!r})"

    def add_line(self, start: Pos) -> None:
        """Record the start of a new line."""
        if start <= self._starts[-1]:
            msg = (
                f"Line start {start} does not follow the previous "
                f"line start {self._starts[-1]}"
            )
            raise ValueError(msg)
        self._starts.append(start)

    def line(self, pos: Pos) -> int:
        """1-based line containing `pos`."""
        if pos < self.base:
            msg = f"Offset {pos} lies before the first line at {self.base}"
            raise ValueError(msg)
        return bisect_right(self._starts, pos)

    def line_start(self, line: int) -> Pos:
        """Offset at which the 1-based `line` starts."""
        if not 1 <= line <= len(self._starts):
            msg = f"Line {line} out of range [1, {len(self._starts)}]"
            raise ValueError(msg)
        return self._starts[line - 1]

    def is_line_start(self, pos: Pos) -> bool:
        return pos >= self.base and self.line_start(self.line(pos)) == pos

    def position(self, pos: Pos) -> Position:
        line = self.line(pos)
        return Position(offset=pos, line=line, column=pos - self.line_start(line) + 1)


class PositionCounter:
    """Monotonically advancing cursor that records line starts.

    Every value handed out is larger than the previous one as long as callers
    advance past each token they position.
    """

    def __init__(self, base: Pos = 1) -> None:
        self._pos = base
        self.lines = LineTable(base)

    def current(self) -> Pos:
        return self._pos

    def advance(self, width: int) -> Pos:
        """Move past `width` characters of rendered text."""
        if width < 0:
            msg = f"Cannot advance by a negative width ({width})"
            raise ValueError(msg)
        self._pos += width
        return self._pos

    def newline(self) -> None:
        """Start a new line at the current offset and step over the break."""
        self.lines.add_line(self._pos)
        self._pos += 1

    def at_line_start(self) -> bool:
        return self.lines.is_line_start(self._pos)
