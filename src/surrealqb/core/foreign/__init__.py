"""Foreign reference functionality: lazy key-or-record references."""

from surrealqb.core.foreign.models import (
    Foreign,
    IntoKey,
    Key,
    KeyedModel,
    Loaded,
    MissingKeyError,
    Unloaded,
    into_key,
    serialize_foreign,
)

__all__ = [
    # States
    "Foreign",
    "Key",
    "Loaded",
    "Unloaded",
    # Keys
    "IntoKey",
    "KeyedModel",
    "MissingKeyError",
    "into_key",
    "serialize_foreign",
]
