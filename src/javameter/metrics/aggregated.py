"""Flat totals over any subtree of the metrics tree."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable, Union

from ..exceptions import UnclassifiedNodeError
from .comments import CommentMetrics
from .elements import FieldMetrics, MethodMetrics, TypeMetrics
from .units import (
    CompilationUnitMetrics,
    JavaMetrics,
    ModularCompilationUnitMetrics,
    ModuleDeclarationMetrics,
    PackageMetrics,
)

MetricsNode = Union[
    JavaMetrics,
    PackageMetrics,
    CompilationUnitMetrics,
    ModularCompilationUnitMetrics,
    ModuleDeclarationMetrics,
    TypeMetrics,
    MethodMetrics,
    FieldMetrics,
]


@dataclass(frozen=True)
class AggregatedMetrics:
    """Sum of every counter in a subtree.

    ``of(node)`` includes the node's own count at its level (one package,
    one type, ...); ``of_children(node)`` leaves it out but still includes
    the comments and statements held by the node itself. Both only read the
    tree.
    """

    modular_compilation_units: int = 0
    packages: int = 0
    compilation_units: int = 0
    types: int = 0
    methods: int = 0
    fields: int = 0
    statements: int = 0
    line_comments: int = 0
    line_comments_length: int = 0
    block_comments: int = 0
    block_comment_lines: int = 0
    block_comments_length: int = 0
    doc_comments: int = 0
    doc_comment_lines: int = 0
    doc_comments_length: int = 0

    def __add__(self, other: AggregatedMetrics) -> AggregatedMetrics:
        if not isinstance(other, AggregatedMetrics):
            return NotImplemented
        return AggregatedMetrics(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )

    @classmethod
    def from_comments(cls, comments: CommentMetrics) -> AggregatedMetrics:
        return cls(
            line_comments=comments.line_comments,
            line_comments_length=comments.line_comments_length,
            block_comments=comments.block_comments,
            block_comment_lines=comments.block_comment_lines,
            block_comments_length=comments.block_comments_length,
            doc_comments=comments.doc_comments,
            doc_comment_lines=comments.doc_comment_lines,
            doc_comments_length=comments.doc_comments_length,
        )

    @classmethod
    def total(cls, parts: Iterable[AggregatedMetrics]) -> AggregatedMetrics:
        result = cls()
        for part in parts:
            result = result + part
        return result

    @classmethod
    def own(cls, node: MetricsNode) -> AggregatedMetrics:
        """The count a node contributes at its own level and nothing else."""
        match node:
            case JavaMetrics() | ModuleDeclarationMetrics():
                return cls()
            case PackageMetrics():
                return cls(packages=1)
            case CompilationUnitMetrics():
                return cls(compilation_units=1)
            case ModularCompilationUnitMetrics():
                return cls(modular_compilation_units=1)
            case TypeMetrics():
                return cls(types=1)
            case MethodMetrics():
                return cls(methods=1)
            case FieldMetrics():
                return cls(fields=1)
            case _:
                raise UnclassifiedNodeError(node, "metrics node")

    @classmethod
    def of(cls, node: MetricsNode) -> AggregatedMetrics:
        return cls.own(node) + cls.of_children(node)

    @classmethod
    def of_children(cls, node: MetricsNode) -> AggregatedMetrics:
        match node:
            case JavaMetrics():
                return cls.total(
                    [cls.of(m) for m in node.modular_compilation_units]
                    + [cls.of(p) for p in node.packages]
                )
            case PackageMetrics():
                return cls.from_comments(node.comments) + cls.total(
                    cls.of(u) for u in node.compilation_units
                )
            case CompilationUnitMetrics():
                return cls.from_comments(node.comments) + cls.total(cls.of(t) for t in node.types)
            case ModularCompilationUnitMetrics():
                return cls.from_comments(node.comments) + cls.of(node.module)
            case ModuleDeclarationMetrics():
                return cls.from_comments(node.comments)
            case TypeMetrics():
                return (
                    cls.from_comments(node.comments)
                    + cls.total(cls.of(f) for f in node.fields)
                    + cls.total(cls.of(m) for m in node.methods)
                    + cls.total(cls.of(t) for t in node.inner_types)
                )
            case MethodMetrics():
                return (
                    cls.from_comments(node.comments)
                    + cls(statements=node.statements.statements)
                    + cls.total(cls.of(t) for t in node.local_types)
                )
            case FieldMetrics():
                return cls.from_comments(node.comments) + cls(statements=node.statements.statements)
            case _:
                raise UnclassifiedNodeError(node, "metrics node")

    @property
    def comments(self) -> int:
        return self.line_comments + self.block_comments + self.doc_comments
