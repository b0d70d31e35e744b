"""astpos - Synthetic source positions for programmatically built syntax trees."""

from astpos.codecs import (
    TypeCodecs,
    from_builtins,
    to_builtins,
)
from astpos.config import SynthesisOptions
from astpos.errors import (
    CycleError,
    DuplicatePositionError,
    MissingPositionError,
    PositionError,
    SharedNodeError,
    TreeDepthError,
    UnsupportedNodeError,
)
from astpos.formats.json import (
    from_json,
    to_json,
)
from astpos.lines import (
    LineTable,
    Position,
    PositionCounter,
)
from astpos.nodes import (
    NO_POS,
    Node,
    Pos,
)
from astpos.positioner import (
    Positioner,
    rewrite_positions,
)
from astpos.schema import (
    FieldKind,
    FieldSchema,
    NodeSchema,
    all_schemas,
    node_schema,
    position_fields,
)
from astpos.verify import (
    missing_positions,
    span_violations,
)
from astpos.walk import (
    inspect,
    iter_children,
    iter_nodes,
)

__all__ = [
    # Core types
    "NO_POS",
    # Errors
    "CycleError",
    "DuplicatePositionError",
    # Schema extraction
    "FieldKind",
    "FieldSchema",
    # Positions
    "LineTable",
    "MissingPositionError",
    "Node",
    "NodeSchema",
    "Pos",
    "Position",
    "PositionCounter",
    "PositionError",
    # Synthesis
    "Positioner",
    "SharedNodeError",
    "SynthesisOptions",
    "TreeDepthError",
    # Serialization
    "TypeCodecs",
    "UnsupportedNodeError",
    "all_schemas",
    "from_builtins",
    "from_json",
    # Traversal
    "inspect",
    "iter_children",
    "iter_nodes",
    # Verification
    "missing_positions",
    "node_schema",
    "position_fields",
    "rewrite_positions",
    "span_violations",
    "to_builtins",
    "to_json",
]
