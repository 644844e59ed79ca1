"""Fluent query text assembly.

Usage:
    query = (
        QueryBuilder()
        .select("*")
        .from_(account)
        .filter(account.email.equals_parameterized())
        .build()
    )
    # "SELECT * FROM Account WHERE email = $email"

    # Conditional and comma-grouped parts:
    query = (
        QueryBuilder()
        .select("*")
        .from_("Account")
        .if_then(only_admins, lambda q: q.filter("role = 'admin'"))
        .fetch_many(["projects", "friends"])
        .build()
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import structlog

from surrealqb.config.settings import get_settings
from surrealqb.core.segment import (
    Held,
    SegmentBuffer,
    SegmentLike,
    Text,
    adopt,
    find_parameter_cycle,
    substitute_parameters,
    to_segment,
)
from surrealqb.query.protocol import Settable

logger = structlog.wrap_logger(logging.getLogger(__name__))

COMMA = ","


def _default_separator() -> str:
    return get_settings().segment_separator


@dataclass(frozen=True)
class QueryBuilder:
    """Immutable query builder - each method returns a new QueryBuilder.

    Builders forked from the same parent never see each other's segments.
    Held strings live in storage shared along a chain; it is append-only so
    every held index stays valid.

    Args:
        separator: Text placed between segments by ``build``.
    """

    separator: str = field(default_factory=_default_separator)
    _buffer: SegmentBuffer = field(default_factory=SegmentBuffer, repr=False)

    # Primitives

    def append(self, segment: SegmentLike) -> QueryBuilder:
        """Add one segment. Empty text is ignored."""
        return self._with(self._buffer.push(to_segment(segment)))

    def append_prefixed(self, prefix: SegmentLike, value: SegmentLike) -> QueryBuilder:
        """Add ``prefix`` then ``value`` as two segments."""
        return self.append(prefix).append(value)

    def append_many(
        self,
        separator: SegmentLike,
        prefix: SegmentLike,
        items: Sequence[SegmentLike],
        suffix: SegmentLike,
    ) -> QueryBuilder:
        """Add ``prefix item suffix`` for each item, with ``separator`` between items.

        Args:
            separator: Segment inserted between consecutive items.
            prefix: Segment added before every item.
            items: Items to add. Nothing is added when empty.
            suffix: Segment added after every item.

        Returns:
            New builder with the items appended.
        """
        builder = self
        for index, item in enumerate(items):
            if index > 0:
                builder = builder.append(separator)
            builder = builder.append_prefixed(prefix, item).append(suffix)
        return builder

    def raw(self, text: SegmentLike) -> QueryBuilder:
        """Push raw text to the buffer."""
        return self.append(text)

    # Clauses

    def create(self, node: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("CREATE", node)

    def update(self, node: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("UPDATE", node)

    def select(self, node: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("SELECT", node)

    def select_many(self, nodes: Sequence[SegmentLike]) -> QueryBuilder:
        return self.append("SELECT").append_many(COMMA, "", nodes, "")

    def from_(self, node: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("FROM", node)

    def also(self, query: SegmentLike) -> QueryBuilder:
        """Add ``query`` with a comma in front of it."""
        return self.append_prefixed(COMMA, query)

    def filter(self, condition: SegmentLike) -> QueryBuilder:
        """Start a WHERE clause."""
        return self.append_prefixed("WHERE", condition)

    def and_where(self, condition: SegmentLike) -> QueryBuilder:
        """Alias for ``filter``."""
        return self.filter(condition)

    def and_(self, condition: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("AND", condition)

    def set(self, update: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("SET", update)

    def set_many(self, updates: Sequence[SegmentLike]) -> QueryBuilder:
        return self.append("SET").append_many(COMMA, "", updates, "")

    def fetch(self, field_name: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("FETCH", field_name)

    def fetch_many(self, fields: Sequence[SegmentLike]) -> QueryBuilder:
        return self.append("FETCH").append_many(COMMA, "", fields, "")

    def limit(self, limit: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("LIMIT", limit)

    def start_at(self, offset: SegmentLike) -> QueryBuilder:
        return self.append_prefixed("START AT", offset)

    # Composition

    def if_then(
        self, condition: bool, action: Callable[[QueryBuilder], QueryBuilder]
    ) -> QueryBuilder:
        """Apply ``action`` only when ``condition`` holds.

        Conditions nest: an inner ``if_then`` never runs when an enclosing
        condition is false.

        Args:
            condition: Whether to apply the action.
            action: Any callable taking and returning a builder.

        Returns:
            The action's result, or this builder unchanged.
        """
        if not condition:
            return self
        return action(self)

    def commas(self, action: Callable[[QueryBuilder], QueryBuilder]) -> QueryBuilder:
        """Add the segments produced by ``action``, separated by commas.

        ``action`` runs against a fresh builder that shares this builder's
        storage, so segments held here can be used inside the group. Held
        segments from any other storage are copied in, and the group's
        parameters are merged in.

        Args:
            action: Callable building the grouped segments.

        Returns:
            New builder with the grouped segments appended.

        Raises:
            ValueError: If the merged parameters reintroduce each other.
        """
        group = QueryBuilder(
            separator=self.separator,
            _buffer=SegmentBuffer(storage=self._buffer.storage),
        )
        source = action(group)._buffer

        buffer = self._buffer
        for index, segment in enumerate(source.fragments):
            if index > 0:
                buffer = buffer.push(Text(COMMA))
            buffer = buffer.push(adopt(buffer, segment))
        for key, value in source.parameters.items():
            buffer = buffer.with_parameter(key, value)
        _check_parameters(buffer.parameters)

        return self._with(buffer)

    def set_object(self, strategy: Settable) -> QueryBuilder:
        """Let ``strategy`` append its fields (usually a SET clause).

        Args:
            strategy: Object or class implementing ``__set_object__``.

        Returns:
            Builder returned by the strategy.

        Raises:
            TypeError: If strategy does not implement Settable.
        """
        if not isinstance(strategy, Settable):
            raise TypeError(f"{strategy!r} does not implement Settable protocol")
        return strategy.__set_object__(self)

    # Storage and parameters

    def hold(self, text: str) -> Held:
        """Keep ``text`` in the builder's storage and return a segment for it.

        Useful when a string is produced in a short-lived scope (a helper,
        a comprehension) and must be added later.

        Unlike every other method this writes in place: the storage is shared
        by every builder forked from the same root and only ever grows, so
        the held string stays reachable from all of them.

        Args:
            text: String to hold.

        Returns:
            Segment usable on any builder sharing this storage, including
            the group builder inside ``commas``. Other builders reject it
            with IndexError.
        """
        return self._buffer.hold(text)

    def param(self, key: str, value: str) -> QueryBuilder:
        """Replace every occurrence of ``key`` with ``value`` when building.

        **IMPORTANT** Do not use this for user provided data, the input is
        not sanitized.

        Args:
            key: Placeholder text, e.g. ``"{{field}}"``.
            value: Replacement text.

        Returns:
            New builder with the parameter registered (last write wins).

        Raises:
            ValueError: If key is empty, or if value contains key or a key
                whose value leads back to it, since the substitution would
                never terminate.
        """
        if not key:
            raise ValueError("Parameter key must not be empty")
        if key in value:
            raise ValueError(f"Value for parameter {key!r} contains the key itself")
        buffer = self._buffer.with_parameter(key, value)
        _check_parameters(buffer.parameters)
        return self._with(buffer)

    def build(self) -> str:
        """Join all segments and substitute parameters.

        Returns:
            Final query text.
        """
        output = substitute_parameters(
            self._buffer.render(self.separator), self._buffer.parameters
        )
        logger.debug(
            "query_built",
            segments=len(self._buffer),
            parameters=len(self._buffer.parameters),
        )
        return output

    def __str__(self) -> str:
        return self.build()

    def _with(self, buffer: SegmentBuffer) -> QueryBuilder:
        return QueryBuilder(separator=self.separator, _buffer=buffer)


def _check_parameters(parameters: dict[str, str]) -> None:
    cycle = find_parameter_cycle(parameters)
    if cycle is not None:
        raise ValueError(f"Parameters form a cycle: {' -> '.join(cycle)}")
