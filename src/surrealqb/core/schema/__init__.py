"""Schema functionality: field descriptors, model views, registry and declaration."""

from surrealqb.core.schema.core import ModelRegistry, get_registry, model, parse_field
from surrealqb.core.schema.models import (
    Direction,
    Field,
    Model,
    ModelSchema,
    SchemaError,
    UnknownModelError,
)

__all__ = [
    # Models
    "Direction",
    "Field",
    "Model",
    "ModelSchema",
    "SchemaError",
    "UnknownModelError",
    # Core
    "model",
    "parse_field",
    "get_registry",
    "ModelRegistry",
]
