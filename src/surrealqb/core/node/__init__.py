"""Node functionality: string helpers for paths, labels and comparisons."""

from surrealqb.core.node.models import Node, as_named_label

__all__ = [
    "Node",
    "as_named_label",
]
