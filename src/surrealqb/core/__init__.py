"""Core functionalities: immutable building blocks for query text.

Architecture Note:
    core/ contains pure, immutable building blocks: segments, nodes, schema
    descriptors and foreign references. The stateful query assembly API lives
    in query/.
"""

from surrealqb.core.foreign import (
    Foreign,
    IntoKey,
    Key,
    KeyedModel,
    Loaded,
    MissingKeyError,
    Unloaded,
    into_key,
)
from surrealqb.core.node import Node, as_named_label
from surrealqb.core.schema import (
    Direction,
    Field,
    Model,
    ModelRegistry,
    ModelSchema,
    SchemaError,
    UnknownModelError,
    get_registry,
    model,
)
from surrealqb.core.segment import (
    Held,
    Segment,
    SegmentBuffer,
    SegmentLike,
    Text,
    substitute_parameters,
    to_segment,
)

__all__ = [
    # Segment
    "Text",
    "Held",
    "Segment",
    "SegmentLike",
    "SegmentBuffer",
    "to_segment",
    "substitute_parameters",
    # Node
    "Node",
    "as_named_label",
    # Schema
    "model",
    "get_registry",
    "ModelRegistry",
    "ModelSchema",
    "Model",
    "Field",
    "Direction",
    "SchemaError",
    "UnknownModelError",
    # Foreign
    "Foreign",
    "Key",
    "Loaded",
    "Unloaded",
    "IntoKey",
    "KeyedModel",
    "MissingKeyError",
    "into_key",
]
