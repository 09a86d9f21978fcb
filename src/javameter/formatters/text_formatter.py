"""Plain text report: a summary followed by an indented outline of the tree."""

from __future__ import annotations

from typing import Optional, Union

from rich.console import Console

from ..metrics import (
    AggregatedMetrics,
    CommentMetrics,
    CompilationUnitMetrics,
    FieldMetrics,
    JavaMetrics,
    MethodMetrics,
    ModularCompilationUnitMetrics,
    ModuleDeclarationMetrics,
    PackageMetrics,
    TypeMetrics,
)
from .base import BaseFormatter, ReportMetadata

INDENT = "  "


def report_header(metadata: ReportMetadata) -> str:
    if metadata.timestamp is None and metadata.version is None:
        return "Javameter report"

    header = "Javameter report created"
    if metadata.timestamp is not None:
        header += f" on {metadata.date_text} {metadata.time_text}"
    if metadata.version is not None:
        header += f" with version {metadata.version}"
    return header


class _Outline:
    """Accumulates indented report lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.level = 0

    def line(self, text: str) -> None:
        self.lines.append(INDENT * self.level + text)

    def count(self, value: int, suffix: str) -> None:
        if value > 0:
            self.line(f"{value}{suffix}")

    def indent(self) -> None:
        self.level += 1

    def dedent(self) -> None:
        self.level -= 1


class TextFormatter(BaseFormatter):
    """Human-readable report; zero counts are left out."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, metrics: JavaMetrics, metadata: ReportMetadata) -> None:
        self.console.print(
            self.format(metrics, metadata), markup=False, highlight=False, soft_wrap=True, end=""
        )

    def format(self, metrics: JavaMetrics, metadata: ReportMetadata) -> str:
        out = _Outline()
        out.line(report_header(metadata))

        out.line("Summary:")
        out.indent()
        self._summary(out, AggregatedMetrics.of(metrics))
        out.dedent()

        out.line("Details:")
        out.indent()
        for modular in metrics.modular_compilation_units:
            self._modular_unit(out, modular)
        for package in metrics.packages:
            self._package(out, package)
        out.dedent()

        return "\n".join(out.lines) + "\n"

    def _summary(self, out: _Outline, totals: AggregatedMetrics) -> None:
        out.count(totals.modular_compilation_units, " modules")
        out.count(totals.packages, " packages")
        out.count(totals.compilation_units, " compilation units")
        out.count(totals.types, " types")
        out.count(totals.methods, " methods")
        out.count(totals.fields, " fields")
        out.count(totals.statements, " statements")
        self._comments(out, totals)

    def _comments(self, out: _Outline, comments: Union[CommentMetrics, AggregatedMetrics]) -> None:
        if comments.line_comments > 0:
            out.line(
                f"{comments.line_comments} line comments, "
                f"total length {comments.line_comments_length}"
            )
        if comments.block_comments > 0:
            out.line(
                f"{comments.block_comments} block comments on {comments.block_comment_lines} lines, "
                f"total length {comments.block_comments_length}"
            )
        if comments.doc_comments > 0:
            out.line(
                f"{comments.doc_comments} JavaDoc comments on {comments.doc_comment_lines} lines, "
                f"total length {comments.doc_comments_length}"
            )

    def _modular_unit(self, out: _Outline, metrics: ModularCompilationUnitMetrics) -> None:
        out.line(metrics.name)
        out.indent()
        self._comments(out, metrics.comments)
        self._module(out, metrics.module)
        out.dedent()

    def _module(self, out: _Outline, metrics: ModuleDeclarationMetrics) -> None:
        out.line(f"{'open module' if metrics.is_open else 'module'} {metrics.name}")
        out.indent()
        self._comments(out, metrics.comments)
        out.count(metrics.requires, " requires")
        out.count(metrics.exports, " exports")
        out.count(metrics.provides, " provides")
        out.count(metrics.uses, " uses")
        out.count(metrics.opens, " opens")
        out.dedent()

    def _package(self, out: _Outline, metrics: PackageMetrics) -> None:
        out.line(f"package {metrics.name}")
        out.indent()
        self._comments(out, metrics.comments)
        for unit in metrics.compilation_units:
            self._unit(out, unit)
        out.dedent()

    def _unit(self, out: _Outline, metrics: CompilationUnitMetrics) -> None:
        out.line(metrics.name)
        out.indent()
        self._comments(out, metrics.comments)
        for type_metrics in metrics.types:
            self._type(out, type_metrics)
        out.dedent()

    def _type(self, out: _Outline, metrics: TypeMetrics) -> None:
        out.line(f"{metrics.kind.value} {metrics.name}")
        out.indent()
        self._comments(out, metrics.comments)
        for field_metrics in metrics.fields:
            self._field(out, field_metrics)
        for method in metrics.methods:
            self._method(out, method)
        for inner in metrics.inner_types:
            self._type(out, inner)
        out.dedent()

    def _method(self, out: _Outline, metrics: MethodMetrics) -> None:
        out.line(f"{metrics.kind.value} {metrics.name}")
        out.indent()
        self._comments(out, metrics.comments)
        out.count(metrics.statements.statements, " statements")
        for local in metrics.local_types:
            self._type(out, local)
        out.dedent()

    def _field(self, out: _Outline, metrics: FieldMetrics) -> None:
        out.line(f"{metrics.kind.value} {metrics.name}")
        out.indent()
        self._comments(out, metrics.comments)
        out.count(metrics.statements.statements, " statements")
        out.dedent()
