"""Collection exceptions: logic errors inside the metrics engine."""

from typing import Any

from .base import JavameterError


class CollectionError(JavameterError):
    """Base class for errors raised while collecting metrics from a syntax tree."""

    pass


class UnclassifiedNodeError(CollectionError):
    """Raised when a syntax node has no classification in the collector's tables.

    This always signals a programming error; counting would otherwise silently
    drift from the source.
    """

    def __init__(self, node: Any, context: str):
        node_type = type(node).__name__
        super().__init__(
            f"Cannot classify {node_type} as {context}",
            details={"node": node_type, "context": context},
        )
        self.node = node
        self.context = context
