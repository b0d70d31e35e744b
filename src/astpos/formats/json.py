"""JSON format adapter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from astpos.codecs import from_builtins, to_builtins

if TYPE_CHECKING:
    from astpos.lines import LineTable
    from astpos.nodes import Node


def to_json(obj: Node | LineTable, *, indent: int | None = 2) -> str:
    """Serialize a node tree or a line table to a JSON string.

    Args:
        obj: The object to serialize
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string representation

    """
    return json.dumps(to_builtins(obj), indent=indent)


def from_json(s: str) -> Any:
    """Deserialize a JSON string to a node tree or a line table.

    Raises:
        ValueError: If the JSON doesn't contain a valid tagged object
        KeyError: If required 'tag' field is missing

    """
    data = json.loads(s)
    if not isinstance(data, dict):
        msg = "Expected JSON object with 'tag' field"
        raise ValueError(msg)
    return from_builtins(data)
