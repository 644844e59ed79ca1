"""surrealqb: typed query construction for graph query languages.

Usage:
    from surrealqb import QueryBuilder, model

    account = model(
        "Account",
        "handle",
        "email",
        "friend<Account>",
        "->manage->Project as managed_projects",
    )
    project = model("Project", "name")

    query = (
        QueryBuilder()
        .select_many(["*", account.managed_projects().name.as_alias("projects")])
        .from_(account)
        .filter(account.email.equals_parameterized())
        .build()
    )
    # "SELECT * , ->manage->Project.name as projects FROM Account WHERE email = $email"
"""

__version__ = "0.1.0"

# Configuration
from surrealqb.config import QueryBuilderSettings, configure_logging, get_settings

# Core primitives
from surrealqb.core import (
    Direction,
    Field,
    Foreign,
    Held,
    IntoKey,
    Key,
    KeyedModel,
    Loaded,
    MissingKeyError,
    Model,
    ModelRegistry,
    Node,
    SchemaError,
    Text,
    UnknownModelError,
    Unloaded,
    as_named_label,
    get_registry,
    into_key,
    model,
)

# Query assembly
from surrealqb.query import QueryBuilder, Settable

__all__ = [
    # Version
    "__version__",
    # Query
    "QueryBuilder",
    "Settable",
    "Text",
    "Held",
    # Schema
    "model",
    "get_registry",
    "ModelRegistry",
    "Model",
    "Field",
    "Direction",
    "SchemaError",
    "UnknownModelError",
    # Node
    "Node",
    "as_named_label",
    # Foreign
    "Foreign",
    "Key",
    "Loaded",
    "Unloaded",
    "IntoKey",
    "KeyedModel",
    "MissingKeyError",
    "into_key",
    # Config
    "QueryBuilderSettings",
    "get_settings",
    "configure_logging",
]
