"""Pure functions over segments and rendered query text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from surrealqb.core.segment.models import Held, Segment, SegmentBuffer, Text

SegmentLike = Segment | str | Any
"""Anything accepted where a fragment is: a Segment, a str, or an object rendered by str()."""


def to_segment(value: SegmentLike) -> Segment:
    """Normalize a segment-like value into a Segment.

    Strings become literal Text. Schema fields, models and nodes render
    through ``str()``.

    Args:
        value: Value to normalize.

    Returns:
        Segment for the value.
    """
    if isinstance(value, (Text, Held)):
        return value
    if isinstance(value, str):
        return Text(value)
    return Text(str(value))


def adopt(target: SegmentBuffer, segment: Segment) -> Segment:
    """Re-home a fragment so it is valid inside ``target``.

    Literal fragments and fragments already held in ``target``'s storage are
    returned unchanged. Fragments held in any other storage are copied into
    ``target``'s storage.

    Raises:
        IndexError: If a held fragment has no storage to copy from.
    """
    if isinstance(segment, Text) or target.owns(segment):
        return segment
    if segment.storage is None or not 0 <= segment.index < len(segment.storage):
        raise IndexError(f"Held segment {segment.index} has no storage to copy from")
    return target.hold(segment.storage[segment.index])


def find_parameter_cycle(parameters: Mapping[str, str]) -> list[str] | None:
    """Find keys whose values reintroduce each other.

    A key depends on every key that occurs in its value. Substitution only
    terminates when these dependencies have no cycle.

    Args:
        parameters: Placeholder to replacement mapping.

    Returns:
        The keys along the first cycle found, starting and ending with the
        same key, or None.
    """
    graph = {
        key: [other for other in parameters if other in value]
        for key, value in parameters.items()
    }
    done: set[str] = set()

    def visit(key: str, path: list[str]) -> list[str] | None:
        if key in path:
            return path[path.index(key) :] + [key]
        if key in done:
            return None
        for other in graph[key]:
            cycle = visit(other, path + [key])
            if cycle is not None:
                return cycle
        done.add(key)
        return None

    for key in graph:
        cycle = visit(key, [])
        if cycle is not None:
            return cycle
    return None


def substitute_parameters(text: str, parameters: Mapping[str, str]) -> str:
    """Replace every occurrence of every parameter key.

    Each key is searched again from the start after every replacement, and
    passes over all keys repeat until one changes nothing, so a replacement
    that introduces any key, earlier or later in ``parameters``, is
    substituted too.

    Args:
        text: Rendered query text.
        parameters: Placeholder to replacement mapping, free of cycles
            (see ``find_parameter_cycle``).

    Returns:
        Text with no occurrence of any key left.
    """
    changed = True
    while changed:
        changed = False
        for key, value in parameters.items():
            index = text.find(key)
            while index != -1:
                text = text[:index] + value + text[index + len(key) :]
                changed = True
                index = text.find(key)
    return text
