"""Type codec registry and builtins conversion for positioned trees."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import fields
from typing import Any, ClassVar

from astpos.lines import LineTable
from astpos.nodes import Node
from astpos.tokens import ChanDir, LitKind, Token

# Type tag format: {"tag": "<type_name>", "val": <encoded_value>}
# Used for non-format-native types to enable unambiguous decoding.
_TAG_KEY = "tag"
_VAL_KEY = "val"


class TypeCodecs:
    """Registry of encode/decode functions for non-JSON-native types.

    Usage:
        TypeCodecs.register(
            Token,
            encode=lambda tok: tok.value,
            decode=Token,
        )
    """

    _registry: ClassVar[
        dict[type, tuple[Callable[[Any], Any], Callable[[Any], Any]]]
    ] = {}

    @classmethod
    def register[T](
        cls,
        typ: type[T],
        encode: Callable[[T], Any],
        decode: Callable[[Any], T],
    ) -> None:
        """Register encode/decode functions for a serializable type.

        Raises:
            ValueError: If a different type with the same __name__ is already
                registered. This ensures tag-based deserialization is unambiguous.

        """
        type_name = typ.__name__
        for existing_type in cls._registry:
            if existing_type is not typ and existing_type.__name__ == type_name:
                msg = (
                    f"Cannot register {typ!r}: a different type with name "
                    f"'{type_name}' is already registered ({existing_type!r}). "
                    f"Type names must be unique for tag-based deserialization."
                )
                raise ValueError(msg)

        cls._registry[typ] = (encode, decode)

    @classmethod
    def get[T](
        cls,
        typ: type[T],
    ) -> tuple[Callable[[T], Any], Callable[[Any], T]] | None:
        """Get codec for type, or None if not registered."""
        return cls._registry.get(typ)

    @classmethod
    def get_by_name(
        cls,
        type_name: str,
    ) -> tuple[type, Callable[[Any], Any]] | None:
        """Get type and decoder by type name (for tag-based deserialization)."""
        for typ, (_, decode) in cls._registry.items():
            if typ.__name__ == type_name:
                return typ, decode
        return None

    @classmethod
    def unregister(cls, typ: type) -> bool:
        """Unregister a type's codec.

        Returns:
            True if the type was registered and removed, False otherwise.

        """
        if typ in cls._registry:
            del cls._registry[typ]
            return True
        return False

    @classmethod
    def clear(cls) -> None:
        """Clear codec registry and re-register builtins."""
        cls._registry.clear()
        _register_builtins()


def _register_builtins() -> None:
    """Pre-register codecs for the enums and tables positioned trees carry."""
    TypeCodecs.register(Token, encode=lambda tok: tok.value, decode=Token)
    TypeCodecs.register(LitKind, encode=lambda kind: kind.value, decode=LitKind)
    TypeCodecs.register(ChanDir, encode=lambda d: d.value, decode=ChanDir)
    TypeCodecs.register(
        LineTable,
        encode=lambda table: list(table.starts),
        decode=LineTable.from_starts,
    )


# Register builtins on module load
_register_builtins()


def _wrap_tagged(type_name: str, value: Any) -> dict[str, Any]:
    """Wrap a value with its type tag for unambiguous encoding."""
    return {_TAG_KEY: type_name, _VAL_KEY: value}


def to_builtins(obj: Any) -> Any:
    """Convert a node tree (or line table) to JSON-compatible Python builtins.

    Registered types are wrapped with type tags:
    {"tag": "<type_name>", "val": <encoded_value>}

    Returns:
        JSON-compatible Python value (dict, list, str, int, float, bool, None)

    """
    typ = type(obj)

    # 1. Registered codec; checked before str since the enums are str subclasses
    if codec := TypeCodecs.get(typ):
        encode, _ = codec
        return _wrap_tagged(typ.__name__, to_builtins(encode(obj)))

    # 2. Node objects
    if isinstance(obj, Node):
        result: dict[str, Any] = {_TAG_KEY: typ.tag}
        for f in fields(obj):
            if not f.name.startswith("_"):
                result[f.name] = to_builtins(getattr(obj, f.name))
        return result

    # 3. Sequences become JSON arrays
    if isinstance(obj, Sequence) and not isinstance(obj, str | bytes):
        return [to_builtins(item) for item in obj]

    # 4. Mappings
    if isinstance(obj, Mapping):
        return {k: to_builtins(v) for k, v in obj.items()}

    # 5. Primitives pass through
    return obj


def _is_type_tag(data: Any) -> bool:
    """Check if data is a type tag envelope.

    Type tags have exactly two keys: "tag" and "val".
    This distinguishes them from Nodes (which have "tag" + field names).
    """
    if not isinstance(data, dict):
        return False
    return set(data.keys()) == {_TAG_KEY, _VAL_KEY}


def from_builtins(data: dict[str, Any]) -> Any:
    """Deserialize a tagged dict to a Node or a registered type.

    Raises:
        KeyError: If 'tag' field is missing
        ValueError: If tag is unknown

    """
    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise KeyError(msg)
    return _deserialize_value(data)


def _deserialize_node(data: dict[str, Any]) -> Node:
    """Deserialize a tagged dict to a Node."""
    tag = data[_TAG_KEY]
    node_cls = Node.registry.get(tag)
    if node_cls is None:
        msg = f"Unknown tag '{tag}'"
        raise ValueError(msg)

    field_values = {}
    for field in fields(node_cls):
        if field.name.startswith("_") or field.name not in data:
            continue
        field_values[field.name] = _deserialize_value(data[field.name])

    return node_cls(**field_values)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a value using tags for type reconstruction."""
    if value is None:
        return None

    # Type tag envelope: {"tag": "<type>", "val": <value>}
    if _is_type_tag(value):
        tag_name, raw_value = value[_TAG_KEY], value[_VAL_KEY]
        codec_entry = TypeCodecs.get_by_name(tag_name)
        if codec_entry is None:
            msg = f"Unknown type tag: {tag_name}"
            raise ValueError(msg)
        _, decode = codec_entry
        return decode(raw_value)

    # Node objects: {"tag": "<node_type>", ...fields}
    if isinstance(value, dict) and _TAG_KEY in value:
        return _deserialize_node(value)

    if isinstance(value, list):
        return [_deserialize_value(item) for item in value]

    if isinstance(value, dict):
        return {k: _deserialize_value(v) for k, v in value.items()}

    return value
