"""Metrics data model: the tree produced by the collector and its aggregation."""

from .aggregated import AggregatedMetrics
from .comments import CommentMetrics, content_length
from .elements import (
    CodeElementMetrics,
    FieldKind,
    FieldMetrics,
    MethodKind,
    MethodMetrics,
    TypeKind,
    TypeMetrics,
)
from .statements import StatementMetrics
from .units import (
    CompilationUnitMetrics,
    JavaMetrics,
    ModularCompilationUnitMetrics,
    ModuleDeclarationMetrics,
    PackageMetrics,
)

__all__ = [
    "AggregatedMetrics",
    "CommentMetrics",
    "content_length",
    "StatementMetrics",
    "CodeElementMetrics",
    "FieldKind",
    "FieldMetrics",
    "MethodKind",
    "MethodMetrics",
    "TypeKind",
    "TypeMetrics",
    "CompilationUnitMetrics",
    "ModuleDeclarationMetrics",
    "ModularCompilationUnitMetrics",
    "PackageMetrics",
    "JavaMetrics",
]
