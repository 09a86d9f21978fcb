"""JSON formatter for javameter."""

import json
from dataclasses import asdict
from typing import Any

from ..metrics import (
    AggregatedMetrics,
    CompilationUnitMetrics,
    FieldMetrics,
    JavaMetrics,
    MethodMetrics,
    ModularCompilationUnitMetrics,
    PackageMetrics,
    TypeMetrics,
)
from .base import BaseFormatter, ReportMetadata


class JsonFormatter(BaseFormatter):
    """Render the metrics tree as nested JSON objects.

    Every node carries its own ``comments`` and a ``summary`` of everything
    below it; the report root carries the ``summary`` of the whole tree.
    """

    def render(self, metrics: JavaMetrics, metadata: ReportMetadata) -> None:
        print(self.format(metrics, metadata))

    def format(self, metrics: JavaMetrics, metadata: ReportMetadata) -> str:
        data: dict[str, Any] = {
            "date": metadata.date_text,
            "time": metadata.time_text,
            "version": metadata.version,
            "summary": asdict(AggregatedMetrics.of(metrics)),
            "modular_compilation_units": [
                self._modular_unit(m) for m in metrics.modular_compilation_units
            ],
            "packages": [self._package(p) for p in metrics.packages],
        }
        return json.dumps(data, indent=2)

    def _modular_unit(self, metrics: ModularCompilationUnitMetrics) -> dict[str, Any]:
        module = metrics.module
        return {
            "name": metrics.name,
            "comments": asdict(metrics.comments),
            "module": {
                "name": module.name,
                "open": module.is_open,
                "requires": module.requires,
                "exports": module.exports,
                "provides": module.provides,
                "uses": module.uses,
                "opens": module.opens,
                "comments": asdict(module.comments),
            },
        }

    def _package(self, metrics: PackageMetrics) -> dict[str, Any]:
        return {
            "name": metrics.name,
            "summary": asdict(AggregatedMetrics.of_children(metrics)),
            "comments": asdict(metrics.comments),
            "compilation_units": [self._unit(u) for u in metrics.compilation_units],
        }

    def _unit(self, metrics: CompilationUnitMetrics) -> dict[str, Any]:
        return {
            "name": metrics.name,
            "summary": asdict(AggregatedMetrics.of_children(metrics)),
            "comments": asdict(metrics.comments),
            "types": [self._type(t) for t in metrics.types],
        }

    def _type(self, metrics: TypeMetrics) -> dict[str, Any]:
        return {
            "name": metrics.name,
            "kind": metrics.kind.value,
            "summary": asdict(AggregatedMetrics.of_children(metrics)),
            "comments": asdict(metrics.comments),
            "fields": [self._field(f) for f in metrics.fields],
            "methods": [self._method(m) for m in metrics.methods],
            "inner_types": [self._type(t) for t in metrics.inner_types],
        }

    def _method(self, metrics: MethodMetrics) -> dict[str, Any]:
        return {
            "name": metrics.name,
            "kind": metrics.kind.value,
            "statements": metrics.statements.statements,
            "summary": asdict(AggregatedMetrics.of_children(metrics)),
            "comments": asdict(metrics.comments),
            "local_types": [self._type(t) for t in metrics.local_types],
        }

    def _field(self, metrics: FieldMetrics) -> dict[str, Any]:
        return {
            "name": metrics.name,
            "kind": metrics.kind.value,
            "statements": metrics.statements.statements,
            "comments": asdict(metrics.comments),
        }
