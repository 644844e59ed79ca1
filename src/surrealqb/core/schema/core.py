"""Model registry, declaration parser and the ``model`` factory.

Usage:
    release = model("Release", "name")
    project = model(
        "Project",
        "name",
        "->has->Release as releases",
        "<-manage<-Account as authors",
    )
    account = model(
        "Account",
        "handle",
        "email",
        "friend<Account>",
        "->manage->Project as managed_projects",
    )

    # Explicit descriptors work too:
    model("Tag", Field("label"), Field("parent", target="Tag"))
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace

import structlog

from surrealqb.core.schema.models import (
    Direction,
    Field,
    Model,
    ModelSchema,
    SchemaError,
    UnknownModelError,
)

logger = structlog.wrap_logger(logging.getLogger(__name__))

_IDENT = r"[A-Za-z][A-Za-z0-9_]*"
_PLAIN = re.compile(rf"^(?P<name>{_IDENT})$")
_LINKED = re.compile(rf"^(?P<name>{_IDENT})\s*<\s*(?P<target>{_IDENT})\s*>$")
_RELATION = re.compile(
    rf"^(?P<arrow1>->|<-)\s*(?P<edge>{_IDENT})\s*(?P<arrow2>->|<-)\s*(?P<target>{_IDENT})"
    rf"\s+as\s+(?P<name>{_IDENT})$"
)


class ModelRegistry:
    """Process-local registry mapping model names to their schemas.

    Relations and linked fields store only their target's name; the registry
    resolves it when the field is entered.
    """

    def __init__(self) -> None:
        """Initialize empty model registry."""
        self._by_name: dict[str, ModelSchema] = {}

    def register(self, schema: ModelSchema) -> ModelSchema:
        """Register a schema and return the registered instance.

        Args:
            schema: Schema to register.

        Returns:
            The registered schema (the existing one if an identical schema
            was registered before).

        Raises:
            SchemaError: If a different schema is already registered under
                the same name.
        """
        existing = self._by_name.get(schema.name)
        if existing is not None:
            if existing == schema:
                return existing
            raise SchemaError(f"Model '{schema.name}' is already declared with different fields")

        self._by_name[schema.name] = schema
        logger.debug("model_registered", model=schema.name, fields=len(schema.fields))
        return schema

    def get(self, name: str) -> ModelSchema | None:
        """Get a registered schema by name.

        Args:
            name: Model name to look up.

        Returns:
            Schema if registered, None otherwise.
        """
        return self._by_name.get(name)

    def resolve(self, name: str) -> ModelSchema:
        """Get a registered schema, failing loudly when it is missing.

        Args:
            name: Model name to look up.

        Returns:
            The registered schema.

        Raises:
            UnknownModelError: If no model is registered under ``name``.
        """
        schema = self._by_name.get(name)
        if schema is None:
            raise UnknownModelError(f"Model '{name}' is not declared")
        logger.debug("model_resolved", model=name)
        return schema

    def is_registered(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


# Module-level registry instance
_registry = ModelRegistry()


def get_registry() -> ModelRegistry:
    """Access the global model registry.

    Returns:
        The process-local ModelRegistry instance.
    """
    return _registry


def parse_field(declaration: str) -> Field:
    """Parse a short field declaration.

    Accepted forms:
        ``name``                          plain field
        ``name<Target>``                  linked field (e.g. self reference)
        ``->edge->Target as name``        forward relation
        ``<-edge<-Target as name``        backward relation

    Args:
        declaration: Declaration string.

    Returns:
        Unbound root-level Field.

    Raises:
        SchemaError: If the declaration matches none of the forms.
    """
    text = declaration.strip()

    if match := _PLAIN.match(text):
        return Field(name=match["name"])

    if match := _LINKED.match(text):
        return Field(name=match["name"], target=match["target"])

    if match := _RELATION.match(text):
        if match["arrow1"] != match["arrow2"]:
            raise SchemaError(f"Mismatched arrows in relation '{declaration}'")
        return Field(
            name=match["name"],
            edge=match["edge"],
            direction=Direction(match["arrow1"]),
            target=match["target"],
        )

    raise SchemaError(f"Cannot parse field declaration '{declaration}'")


def _validate_field(model_name: str, member: Field) -> None:
    if not member.name or member.name.startswith("_"):
        raise SchemaError(f"Invalid field name '{member.name}' in model '{model_name}'")
    if member.prefix:
        raise SchemaError(
            f"Field '{member.name}' of model '{model_name}' must be declared at the root"
        )
    if member.is_relation and (not member.edge or not member.target):
        raise SchemaError(
            f"Relation '{member.name}' of model '{model_name}' needs an edge and a target"
        )
    if not member.is_relation and member.edge:
        raise SchemaError(
            f"Field '{member.name}' of model '{model_name}' has an edge but no direction"
        )


def model(name: str, *members: str | Field, registry: ModelRegistry | None = None) -> Model:
    """Declare a model and return its root view.

    Declaration never expands relations; targets are looked up in the
    registry only when a field is entered, so declaration order between
    models does not matter.

    Args:
        name: Model (table) name, used when rendering relations to it.
        *members: Field declarations, as strings or Field objects.
        registry: Registry to declare in. Defaults to the global registry.

    Returns:
        Root view of the declared model.

    Raises:
        SchemaError: If a declaration is malformed, names repeat, or the name
            is already taken by a different model.
    """
    if not _PLAIN.match(name):
        raise SchemaError(f"Invalid model name '{name}'")

    registry = registry if registry is not None else _registry

    fields: list[Field] = []
    seen: set[str] = set()
    for member in members:
        parsed = parse_field(member) if isinstance(member, str) else member
        _validate_field(name, parsed)
        if parsed.name in seen:
            raise SchemaError(f"Field '{parsed.name}' declared twice in model '{name}'")
        seen.add(parsed.name)
        fields.append(replace(parsed, registry=registry))

    schema = registry.register(ModelSchema(name=name, fields=tuple(fields)))
    return Model(schema)
