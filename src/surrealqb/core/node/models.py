"""Node strings with fluent composition helpers.

Usage:
    Node("Account").with_("IS_FRIEND").with_("Account:Mark")
    # "Account->IS_FRIEND->Account:Mark"

    Node("John").as_named_label("Account")
    # "Account:John"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from surrealqb.config.settings import get_settings


class Node(str):
    """String that composes graph paths and comparison fragments.

    Immutable like any str - each method returns a new Node.
    """

    __slots__ = ()

    def with_(self, node: Any) -> Node:
        """Traverse to ``node``: ``self->node``."""
        return Node(f"{self}->{node}")

    def with_id(self, identifier: Any) -> Node:
        """Attach a record identifier: ``self:identifier``."""
        return Node(f"{self}:{identifier}")

    def as_named_label(self, table: Any) -> Node:
        """Use this node as the identifier of a record in ``table``."""
        return as_named_label(self, table)

    def equals(self, value: Any) -> Node:
        return Node(f"{self} = {value}")

    def equals_parameterized(self) -> Node:
        """Compare against a parameter named after this node: ``self = $self``."""
        return Node(f"{self} = {get_settings().parameter_prefix}{self}")

    def greater_than(self, value: Any) -> Node:
        return Node(f"{self} > {value}")

    def lower_than(self, value: Any) -> Node:
        return Node(f"{self} < {value}")

    def plus_equal(self, value: Any) -> Node:
        return Node(f"{self} += {value}")

    def as_alias(self, alias: Any) -> Node:
        return Node(f"{self} as {alias}")

    def if_then(self, condition: bool, action: Callable[[Node], Any]) -> Node:
        """Apply ``action`` only when ``condition`` holds.

        Args:
            condition: Whether to apply the action.
            action: Callable receiving this node and returning the new text.

        Returns:
            The action's result as a Node, or this node unchanged.
        """
        if not condition:
            return self
        return Node(action(self))


def as_named_label(identifier: Any, table: Any) -> Node:
    """Combine an identifier and a table name into ``table:identifier``.

    Args:
        identifier: Record identifier.
        table: Table (entity) name.

    Returns:
        Label usable as a record id in CREATE-style statements.
    """
    return Node(f"{table}:{identifier}")
