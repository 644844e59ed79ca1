"""Schema models: field and relation descriptors and read-only model views.

Usage:
    account = model("Account", "handle", "friend<Account>", "->manage->Project as managed_projects")

    str(account.handle)                       # "handle"
    str(account.friend().handle)              # "friend.handle"
    str(account.managed_projects)             # "->manage->Project"
    account.managed_projects().name.as_alias("names")
    # "->manage->Project.name as names"
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from surrealqb.config.settings import get_settings
from surrealqb.core.node import Node

if TYPE_CHECKING:
    from surrealqb.core.schema.core import ModelRegistry


class SchemaError(Exception):
    """Raised when a model declaration is malformed or conflicts with another."""

    pass


class UnknownModelError(SchemaError, LookupError):
    """Raised when a relation targets a model that was never declared."""

    pass


class Direction(Enum):
    """Traversal direction of a field, valued by its arrow."""

    NONE = ""  # Plain or linked field
    FORWARD = "->"
    BACKWARD = "<-"


@dataclass(frozen=True, slots=True)
class Field:
    """Descriptor for one field or relation of a model.

    Immutable - traversal and aliasing return new values, so paths composed
    from the same root never interfere.

    Attributes:
        name: Local name the field is declared under.
        prefix: Rendered path of the enclosing traversal, empty at the root.
        alias: Alias appended by ``str()``, if any.
        edge: Edge label, only set on relations.
        direction: Arrow direction, NONE for plain and linked fields.
        target: Name of the model reached by entering this field.
        registry: Registry ``target`` is resolved in. Defaults to the global one.
    """

    name: str
    prefix: str = ""
    alias: str | None = None
    edge: str = ""
    direction: Direction = Direction.NONE
    target: str | None = None
    registry: ModelRegistry | None = field(default=None, repr=False, compare=False)

    @property
    def is_relation(self) -> bool:
        return self.direction is not Direction.NONE

    @property
    def path(self) -> str:
        """Unaliased rendering of the field under its prefix."""
        if self.is_relation:
            arrow = self.direction.value
            return f"{self.prefix}{arrow}{self.edge}{arrow}{self.target}"
        if self.prefix:
            return f"{self.prefix}.{self.name}"
        return self.name

    def __str__(self) -> str:
        if self.alias:
            return f"{self.path} as {self.alias}"
        return self.path

    def __call__(self) -> Model:
        """Enter the field: the target model with this field's path as prefix.

        The target is resolved on every call, never at declaration time, so
        self-referencing and mutually referencing models terminate.

        Returns:
            View of the target model.

        Raises:
            TypeError: If the field is a plain field.
            UnknownModelError: If the target model was never declared.
        """
        if self.target is None:
            raise TypeError(f"Field '{self.name}' is a plain field and cannot be entered")
        registry = self.registry
        if registry is None:
            # Late import to avoid circular dependency
            from surrealqb.core.schema.core import get_registry

            registry = get_registry()
        return Model(registry.resolve(self.target), prefix=self.path)

    def aliased(self, alias: str) -> Field:
        """Copy of this field rendered as ``path as alias``."""
        return replace(self, alias=alias)

    def as_alias(self, alias: str | None = None) -> str:
        """Render ``path as alias``, defaulting to the field's own name.

        Args:
            alias: Alias to use. Defaults to the declared local name.

        Returns:
            Aliased path string. The field itself is left untouched.
        """
        return str(Node(self.path).as_alias(alias if alias is not None else self.name))

    def equals(self, value: Any) -> str:
        return str(Node(self.path).equals(value))

    def equals_parameterized(self) -> str:
        """Render ``path = $name``, or ``path = $alias`` when aliased."""
        parameter = self.alias or self.name
        return f"{self.path} = {get_settings().parameter_prefix}{parameter}"

    def as_named_label(self, table: Any) -> str:
        """Render ``table:path``."""
        return str(Node(self.path).as_named_label(table))


@dataclass(frozen=True, slots=True)
class ModelSchema:
    """Declared shape of one model: its name and root-level fields, in order."""

    name: str
    fields: tuple[Field, ...] = ()
    _index: dict[str, Field] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {f.name: f for f in self.fields})

    def get(self, name: str) -> Field | None:
        """Root-level field declared under ``name``, if any."""
        return self._index.get(name)


class Model:
    """Read-only view of a model schema under a traversal prefix.

    Members are reachable as attributes or items. The view defines no public
    attributes of its own, so any field name (``name``, ``id`` ...) resolves to
    the field.

    Args:
        schema: Schema to expose.
        prefix: Path the view was entered through, empty at the root.
    """

    __slots__ = ("_schema", "_prefix")

    def __init__(self, schema: ModelSchema, prefix: str = ""):
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_prefix", prefix)

    def __getitem__(self, name: str) -> Field:
        member = self._schema.get(name)
        if member is None:
            raise KeyError(name)
        if not self._prefix:
            return member
        return replace(member, prefix=self._prefix)

    def __getattr__(self, name: str) -> Field:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f"Model '{self._schema.name}' has no field '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Model '{self._schema.name}' is read-only")

    def __iter__(self) -> Iterator[Field]:
        for member in self._schema.fields:
            yield self[member.name]

    def __len__(self) -> int:
        return len(self._schema.fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._schema.get(name) is not None

    def __dir__(self) -> list[str]:
        return [f.name for f in self._schema.fields]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return self._schema == other._schema and self._prefix == other._prefix

    def __hash__(self) -> int:
        return hash((self._schema.name, self._prefix))

    def __str__(self) -> str:
        return self._schema.name

    def __repr__(self) -> str:
        if self._prefix:
            return f"Model({self._schema.name!r}, prefix={self._prefix!r})"
        return f"Model({self._schema.name!r})"
