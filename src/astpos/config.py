"""Options for position synthesis."""

from __future__ import annotations

from dataclasses import dataclass

from astpos.nodes import NO_POS


@dataclass(frozen=True)
class SynthesisOptions:
    """Tunable inputs of a synthesis run.

    Attributes:
        base: First cursor value. Must be greater than NO_POS.
        multiline_threshold: Element count from which a composite literal is
            laid out over several lines.

    """

    base: int = 1
    multiline_threshold: int = 4

    def __post_init__(self) -> None:
        if self.base <= NO_POS:
            msg = f"base must be greater than {NO_POS}, got {self.base}"
            raise ValueError(msg)
        if self.multiline_threshold < 1:
            msg = (
                "multiline_threshold must be at least 1, "
                f"got {self.multiline_threshold}"
            )
            raise ValueError(msg)
