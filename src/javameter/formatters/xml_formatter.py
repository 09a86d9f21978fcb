"""XML formatter for javameter.

Element layout::

    <javameter-report date=".." time=".." version="..">
      <summary .../>
      <modular-compilation-units count="N">
        <modular-compilation-unit name="..">
          <comments .../>
          <module name=".." open="false" requires="N" ...>
            <comments .../>
          </module>
        </modular-compilation-unit>
      </modular-compilation-units>
      <packages count="N">
        <package name="..">
          <summary .../>
          <compilation-units count="N">
            <compilation-unit name="..">
              <summary .../> <comments .../> <types count="N"> ...

Counters are written only when positive; empty sequences and empty
``comments`` elements are left out.
"""

import xml.etree.ElementTree as ET
from collections.abc import Callable, Sequence
from typing import TypeVar, Union

from ..metrics import (
    AggregatedMetrics,
    CommentMetrics,
    CompilationUnitMetrics,
    FieldMetrics,
    JavaMetrics,
    MethodMetrics,
    ModularCompilationUnitMetrics,
    PackageMetrics,
    TypeMetrics,
)
from .base import BaseFormatter, ReportMetadata

T = TypeVar("T")

ROOT_ELEMENT = "javameter-report"

_SUMMARY_ATTRIBUTES = (
    ("modular-compilation-units", "modular_compilation_units"),
    ("packages", "packages"),
    ("compilation-units", "compilation_units"),
    ("types", "types"),
    ("methods", "methods"),
    ("fields", "fields"),
    ("statements", "statements"),
)

_COMMENT_ATTRIBUTES = (
    ("line-comments", "line_comments"),
    ("line-comments-length", "line_comments_length"),
    ("block-comments", "block_comments"),
    ("block-comments-lines", "block_comment_lines"),
    ("block-comments-length", "block_comments_length"),
    ("javadocs", "doc_comments"),
    ("javadoc-lines", "doc_comment_lines"),
    ("javadocs-length", "doc_comments_length"),
)


def _set_if_positive(element: ET.Element, name: str, value: int) -> None:
    if value > 0:
        element.set(name, str(value))


def _counters(
    element: ET.Element,
    source: Union[AggregatedMetrics, CommentMetrics],
    attributes: Sequence[tuple[str, str]],
) -> None:
    for name, attribute in attributes:
        _set_if_positive(element, name, getattr(source, attribute))


class XmlFormatter(BaseFormatter):
    """Render the metrics tree as an XML document."""

    def render(self, metrics: JavaMetrics, metadata: ReportMetadata) -> None:
        print(self.format(metrics, metadata))

    def format(self, metrics: JavaMetrics, metadata: ReportMetadata) -> str:
        return ET.tostring(self.build(metrics, metadata), encoding="unicode", xml_declaration=True)

    def build(self, metrics: JavaMetrics, metadata: ReportMetadata) -> ET.Element:
        """The report as an element tree, indented for output."""
        root = ET.Element(ROOT_ELEMENT)
        if metadata.timestamp is not None:
            root.set("date", metadata.date_text)
            root.set("time", metadata.time_text)
        if metadata.version is not None:
            root.set("version", metadata.version)

        self._summary(root, AggregatedMetrics.of(metrics))
        self._sequence(
            root,
            "modular-compilation-units",
            "modular-compilation-unit",
            metrics.modular_compilation_units,
            self._modular_unit,
        )
        self._sequence(root, "packages", "package", metrics.packages, self._package)

        ET.indent(root)
        return root

    # ------------------------------------------------------------------

    @staticmethod
    def _sequence(
        parent: ET.Element,
        name: str,
        child_name: str,
        children: Sequence[T],
        write_child: Callable[[ET.Element, T], None],
    ) -> None:
        if not children:
            return
        sequence = ET.SubElement(parent, name, count=str(len(children)))
        for child in children:
            write_child(ET.SubElement(sequence, child_name), child)

    @staticmethod
    def _summary(parent: ET.Element, totals: AggregatedMetrics) -> None:
        element = ET.SubElement(parent, "summary")
        _counters(element, totals, _SUMMARY_ATTRIBUTES + _COMMENT_ATTRIBUTES)

    @staticmethod
    def _comments(parent: ET.Element, comments: CommentMetrics) -> None:
        if not comments.is_empty:
            _counters(ET.SubElement(parent, "comments"), comments, _COMMENT_ATTRIBUTES)

    def _modular_unit(self, element: ET.Element, metrics: ModularCompilationUnitMetrics) -> None:
        element.set("name", metrics.name)
        self._comments(element, metrics.comments)

        module = metrics.module
        module_element = ET.SubElement(
            element, "module", name=module.name, open="true" if module.is_open else "false"
        )
        _set_if_positive(module_element, "requires", module.requires)
        _set_if_positive(module_element, "exports", module.exports)
        _set_if_positive(module_element, "provides", module.provides)
        _set_if_positive(module_element, "uses", module.uses)
        _set_if_positive(module_element, "opens", module.opens)
        self._comments(module_element, module.comments)

    def _package(self, element: ET.Element, metrics: PackageMetrics) -> None:
        element.set("name", metrics.name)
        self._summary(element, AggregatedMetrics.of_children(metrics))
        self._comments(element, metrics.comments)
        self._sequence(
            element, "compilation-units", "compilation-unit", metrics.compilation_units, self._unit
        )

    def _unit(self, element: ET.Element, metrics: CompilationUnitMetrics) -> None:
        element.set("name", metrics.name)
        self._summary(element, AggregatedMetrics.of_children(metrics))
        self._comments(element, metrics.comments)
        self._sequence(element, "types", "type", metrics.types, self._type)

    def _type(self, element: ET.Element, metrics: TypeMetrics) -> None:
        element.set("name", metrics.name)
        element.set("kind", metrics.kind.value)
        self._summary(element, AggregatedMetrics.of_children(metrics))
        self._comments(element, metrics.comments)
        self._sequence(element, "fields", "field", metrics.fields, self._field)
        self._sequence(element, "methods", "method", metrics.methods, self._method)
        self._sequence(element, "inner-types", "inner-type", metrics.inner_types, self._type)

    def _method(self, element: ET.Element, metrics: MethodMetrics) -> None:
        element.set("name", metrics.name)
        element.set("kind", metrics.kind.value)
        _set_if_positive(element, "statements", metrics.statements.statements)
        self._summary(element, AggregatedMetrics.of_children(metrics))
        self._comments(element, metrics.comments)
        self._sequence(element, "local-types", "local-type", metrics.local_types, self._type)

    def _field(self, element: ET.Element, metrics: FieldMetrics) -> None:
        element.set("name", metrics.name)
        element.set("kind", metrics.kind.value)
        _set_if_positive(element, "statements", metrics.statements.statements)
        self._comments(element, metrics.comments)
