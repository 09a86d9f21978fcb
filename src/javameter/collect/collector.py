"""Root collector: turns compilation units into one ``JavaMetrics`` tree."""

from __future__ import annotations

from typing import Optional, Union

from ..exceptions import CollectionError
from ..logging_config import get_logger
from ..metrics import JavaMetrics
from ..syntax import JavaLanguageLevel, JavaSourceParser
from ..syntax.nodes import CompilationUnit
from .drivers import UnitMetricsCollector

logger = get_logger(__name__)


class JavaMetricsCollector:
    """Collects the metrics of any number of compilation units.

    The collector owns its ``JavaMetrics`` and is its only writer. Each unit
    is collected into a detached subtree first and merged only once it is
    complete, so a unit that fails leaves the accumulated metrics untouched.
    Use one collector per thread and combine the results with
    ``JavaMetrics.merge``.

    Usage:
        collector = JavaMetricsCollector(JavaLanguageLevel.JAVA_17)
        collector.collect("Point.java", source)
        for package in collector.metrics:
            ...
    """

    def __init__(
        self,
        language_level: JavaLanguageLevel = JavaLanguageLevel.default(),
        enable_preview: bool = False,
        parser: Optional[JavaSourceParser] = None,
    ) -> None:
        self.parser = parser or JavaSourceParser(language_level, enable_preview)
        self._metrics = JavaMetrics()
        self._num_units = 0

    @property
    def metrics(self) -> JavaMetrics:
        return self._metrics

    @property
    def num_units(self) -> int:
        """Compilation units collected so far, modular ones included."""
        return self._num_units

    @property
    def collected_packages(self) -> list[str]:
        return [package.name for package in self._metrics.packages]

    @property
    def num_collected_packages(self) -> int:
        return self._metrics.num_packages

    def collect(self, name: str, source: Union[str, bytes]) -> None:
        """Parse ``source`` and collect it as the unit ``name``.

        Raises:
            ParsingError: If the source cannot be parsed
            CollectionError: If the syntax tree contains something the
                collectors cannot classify
        """
        self.collect_unit(name, self.parser.parse(name, source))

    def collect_unit(self, name: str, unit: CompilationUnit) -> None:
        """Collect an already parsed compilation unit."""
        if not name:
            raise CollectionError("Compilation unit name must not be empty")

        drivers = UnitMetricsCollector()
        if unit.module is not None:
            modular = drivers.collect_modular_compilation_unit(unit, name)
            self._metrics.add(modular)
        else:
            collected = drivers.collect_compilation_unit(unit, name)
            package = self._metrics.maybe_create_package(collected.package_name)
            package.comments.add(collected.package_comments)
            package.add(collected.metrics)

        self._num_units += 1
        logger.debug("Merged %s (%d comments attributed)", name, len(drivers.ledger))
