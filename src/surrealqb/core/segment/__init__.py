"""Segment functionality: path fragments, the segment buffer and text assembly."""

from surrealqb.core.segment.models import Held, Segment, SegmentBuffer, Text
from surrealqb.core.segment.operations import (
    SegmentLike,
    adopt,
    find_parameter_cycle,
    substitute_parameters,
    to_segment,
)

__all__ = [
    # Models
    "Text",
    "Held",
    "Segment",
    "SegmentBuffer",
    # Operations
    "SegmentLike",
    "to_segment",
    "adopt",
    "find_parameter_cycle",
    "substitute_parameters",
]
