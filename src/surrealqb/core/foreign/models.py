"""Foreign reference models: key-or-loaded references to related records.

Usage:
    class Account(KeyedModel):
        handle: str = ""

    class File(BaseModel):
        name: str
        author: Foreign[Account] = Unloaded()
        attachments: Foreign[list[Attachment]] = Unloaded()

    File.model_validate_json('{"name": "a", "author": "Account:John"}').author
    # Key(identifier="Account:John")

    File(name="a", author=Loaded(Account(id="Account:John"))).model_dump()
    # {"name": "a", "author": "Account:John", "attachments": None}
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, GetCoreSchemaHandler
from pydantic_core import core_schema

T = TypeVar("T")


class MissingKeyError(ValueError):
    """Raised when a record has no assigned identifier to reference it by."""

    pass


@runtime_checkable
class IntoKey(Protocol):
    """Record → its identifying key (raises MissingKeyError if unassigned)."""

    def __into_key__(self) -> str: ...


def into_key(entity: Any) -> str:
    """Extract the identifying key of a record.

    Args:
        entity: Record implementing IntoKey.

    Returns:
        The record's key.

    Raises:
        MissingKeyError: If the record has no identifier yet.
        TypeError: If the record does not implement IntoKey.
    """
    if not isinstance(entity, IntoKey):
        raise TypeError(f"{type(entity).__name__} does not implement IntoKey protocol")
    return entity.__into_key__()


def _is_collection(tp: Any) -> bool:
    origin = get_origin(tp)
    return isinstance(origin, type) and issubclass(origin, Sequence) and origin is not str


class Foreign(Generic[T]):
    """Reference to a related record: a key, the loaded record, or nothing.

    Concrete states are Key, Loaded and Unloaded. Annotate pydantic fields as
    ``Foreign[Target]`` or ``Foreign[list[Target]]`` for one-to-many relations.
    """

    __slots__ = ()

    def key(self) -> Any:
        """Identifying key (a list of keys for collections), or None."""
        return None

    def value(self) -> T | None:
        """Loaded record, or None. Never fetches."""
        return None

    def is_loaded(self) -> bool:
        return False

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Decode by trying key, then record, then null; encode as the key.

        No discriminator is needed: the first shape the input matches wins.
        Inside collections, a list of strings is read as keys.
        """
        args = get_args(source)
        target = args[0] if args else Any

        key_schema: core_schema.CoreSchema = core_schema.str_schema(strict=True)
        if _is_collection(target):
            key_schema = core_schema.list_schema(key_schema, strict=True)

        choices: list[core_schema.CoreSchema] = [
            core_schema.no_info_after_validator_function(Key, key_schema),
            core_schema.no_info_after_validator_function(Loaded, handler.generate_schema(target)),
            core_schema.no_info_after_validator_function(
                lambda _: Unloaded(), core_schema.none_schema()
            ),
        ]

        return core_schema.json_or_python_schema(
            json_schema=core_schema.union_schema(choices, mode="left_to_right"),
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(Foreign), *choices], mode="left_to_right"
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                serialize_foreign, info_arg=False
            ),
        )


@dataclass(frozen=True)
class Key(Foreign[Any]):
    """Only the identifier is known (a list of identifiers for collections)."""

    identifier: str | list[str]

    def key(self) -> str | list[str]:
        return self.identifier


@dataclass(frozen=True)
class Loaded(Foreign[T]):
    """The full record is known (a list of records for collections)."""

    entity: T

    def key(self) -> str | list[str] | None:
        """Key extracted from the record, or None if it cannot be extracted.

        Extraction fails when the record has no identifier or does not
        implement IntoKey. ``serialize_foreign`` raises in both cases instead.
        """
        entities = self.entity if isinstance(self.entity, list) else [self.entity]
        if not all(isinstance(e, IntoKey) for e in entities):
            return None
        try:
            if isinstance(self.entity, list):
                return [into_key(e) for e in self.entity]
            return into_key(self.entity)
        except MissingKeyError:
            return None

    def value(self) -> T:
        return self.entity

    def is_loaded(self) -> bool:
        return True


@dataclass(frozen=True)
class Unloaded(Foreign[Any]):
    """Relation exists in the model but was not fetched."""

    pass


def serialize_foreign(reference: Foreign[Any]) -> str | list[str] | None:
    """Collapse a reference to its key.

    Args:
        reference: Reference to serialize.

    Returns:
        The key, a list of keys for collections, or None when unloaded.

    Raises:
        MissingKeyError: If a loaded record has no identifier.
    """
    if isinstance(reference, Key):
        return reference.identifier
    if isinstance(reference, Loaded):
        if isinstance(reference.entity, list):
            return [into_key(e) for e in reference.entity]
        return into_key(reference.entity)
    return None


class KeyedModel(BaseModel):
    """Pydantic base for records identified by an optional ``id``."""

    id: str | None = None

    def __into_key__(self) -> str:
        if self.id is None:
            raise MissingKeyError(f"The {type(self).__name__.lower()} has no ID")
        return self.id
