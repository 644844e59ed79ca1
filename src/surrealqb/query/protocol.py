"""Extension point for filling a query from a record type.

Usage:
    class Account(KeyedModel):
        handle: str = ""
        email: str = ""

        @classmethod
        def __set_object__(cls, builder: QueryBuilder) -> QueryBuilder:
            return builder.set_many(
                [
                    account.handle.equals_parameterized(),
                    account.email.equals_parameterized(),
                ]
            )

    QueryBuilder().create("Account:John").set_object(Account).build()
    # "CREATE Account:John SET handle = $handle , email = $email"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from surrealqb.query.builder import QueryBuilder


@runtime_checkable
class Settable(Protocol):
    """Strategy that appends a type's SET clause (or similar) to a builder.

    Implementations only use the builder's public API.
    """

    def __set_object__(self, builder: QueryBuilder) -> QueryBuilder: ...
