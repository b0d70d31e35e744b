"""Errors raised by position synthesis.

Every error is a programming error in the input tree or in a layout rule.
Synthesis fails fast and leaves the tree untouched, so a renderer never sees
a partially positioned tree.
"""

from __future__ import annotations


class PositionError(Exception):
    """Base class for position synthesis failures."""


class UnsupportedNodeError(PositionError, TypeError):
    """A value in a child slot is not a node kind synthesis can position."""


class CycleError(PositionError):
    """A node was reached again while still being visited."""


class SharedNodeError(PositionError):
    """A node was reached through more than one parent."""


class DuplicatePositionError(PositionError):
    """A position field was assigned twice in one synthesis run."""


class MissingPositionError(PositionError):
    """A mandatory position field was never assigned."""


class TreeDepthError(PositionError):
    """The tree is nested deeper than the interpreter's recursion limit."""
