"""Segment models: path fragments and the buffer that orders them.

Usage:
    buffer = SegmentBuffer().push(Text("SELECT")).push(Text("*"))
    held = buffer.hold(f"{table}:{identifier}")
    buffer = buffer.push(held)
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Text:
    """Literal piece of query text."""

    value: str


@dataclass(frozen=True, slots=True)
class Held:
    """Reference to a string kept in a buffer's storage.

    The fragment remembers the storage it was created in and is only valid in
    buffers sharing that storage.
    """

    index: int
    storage: list[str] | None = field(default=None, compare=False, repr=False)


Segment = Text | Held


@dataclass(frozen=True, slots=True)
class SegmentBuffer:
    """Ordered fragments plus the strings and parameters they depend on.

    Immutable except for ``storage``, which is append-only and shared by every
    buffer derived from this one. Indices handed out by ``hold`` stay valid
    for all of them.
    """

    fragments: tuple[Segment, ...] = ()
    storage: list[str] = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)

    def push(self, segment: Segment) -> SegmentBuffer:
        """Return a buffer with ``segment`` appended.

        Empty literals are dropped so the output never gets stray separators.

        Args:
            segment: Fragment to append.

        Returns:
            New buffer sharing this buffer's storage.

        Raises:
            IndexError: If a held fragment was created in another storage or
                points outside this one.
        """
        if isinstance(segment, Text) and not segment.value:
            return self
        if isinstance(segment, Held) and not self.owns(segment):
            raise IndexError(f"Held segment {segment.index} does not belong to this buffer")
        return SegmentBuffer(
            fragments=self.fragments + (segment,),
            storage=self.storage,
            parameters=self.parameters,
        )

    def hold(self, text: str) -> Held:
        """Keep ``text`` alive in storage and return a fragment pointing at it."""
        self.storage.append(text)
        return Held(len(self.storage) - 1, self.storage)

    def owns(self, segment: Held) -> bool:
        """Whether ``segment`` was held in this buffer's storage."""
        return segment.storage is self.storage and 0 <= segment.index < len(self.storage)

    def with_parameter(self, key: str, value: str) -> SegmentBuffer:
        """Return a buffer with ``key`` mapped to ``value`` (last write wins)."""
        return SegmentBuffer(
            fragments=self.fragments,
            storage=self.storage,
            parameters={**self.parameters, key: value},
        )

    def resolve(self, segment: Segment) -> str:
        """Text a fragment stands for."""
        if isinstance(segment, Held):
            return self.storage[segment.index]
        return segment.value

    def render(self, separator: str = " ") -> str:
        """Join all fragments, without parameter substitution."""
        return separator.join(self.resolve(s) for s in self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)
