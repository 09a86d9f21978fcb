"""
javameter - structural and documentation metrics for Java source code.

Counts packages, compilation units, types, methods, fields, statements and
line/block/doc comments at every level of the declaration hierarchy, and
attributes every comment to exactly one declaration.
"""

__version__ = "0.1.0"

from .collect import JavaMetricsCollector
from .metrics import AggregatedMetrics, JavaMetrics
from .syntax import JavaLanguageLevel, JavaSourceParser

__all__ = [
    "JavaMetricsCollector",  # Main entry point
    "JavaMetrics",
    "AggregatedMetrics",
    "JavaSourceParser",
    "JavaLanguageLevel",
]
