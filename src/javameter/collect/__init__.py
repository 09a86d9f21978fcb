"""Metrics collection: comment attribution, statement counting and the
drivers that build the metrics tree from parsed compilation units."""

from .attribution import CommentLedger, adjacent_comments, effective_start_line
from .collector import JavaMetricsCollector
from .drivers import CollectedUnit, UnitMetricsCollector
from .kinds import field_kind, method_kind, method_name, type_kind, type_name
from .statements import StatementWalker, statement_count

__all__ = [
    "CommentLedger",
    "adjacent_comments",
    "effective_start_line",
    "JavaMetricsCollector",
    "CollectedUnit",
    "UnitMetricsCollector",
    "field_kind",
    "method_kind",
    "method_name",
    "type_kind",
    "type_name",
    "StatementWalker",
    "statement_count",
]
