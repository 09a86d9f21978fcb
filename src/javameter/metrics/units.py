"""Metrics for compilation units, modules, packages and the root aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .elements import CodeElementMetrics, TypeMetrics


@dataclass
class CompilationUnitMetrics(CodeElementMetrics):
    """An ordinary source file and its top-level types."""

    types: list[TypeMetrics] = field(default_factory=list, kw_only=True)

    def add_type(self, metrics: TypeMetrics) -> None:
        self.types.append(metrics)


@dataclass
class ModuleDeclarationMetrics(CodeElementMetrics):
    is_open: bool = False
    requires: int = 0
    exports: int = 0
    provides: int = 0
    uses: int = 0
    opens: int = 0


@dataclass
class ModularCompilationUnitMetrics(CodeElementMetrics):
    """A ``module-info`` source file."""

    module: ModuleDeclarationMetrics


@dataclass
class PackageMetrics(CodeElementMetrics):
    """A package; the empty name stands for the default package."""

    compilation_units: list[CompilationUnitMetrics] = field(default_factory=list, kw_only=True)

    def __post_init__(self) -> None:
        if self.name is None:
            raise ValueError("PackageMetrics requires a name")

    def add(self, metrics: CompilationUnitMetrics) -> None:
        self.compilation_units.append(metrics)


class JavaMetrics:
    """Root of the metrics tree.

    Packages are kept in first-seen order and looked up by name, so every
    compilation unit declaring the same package lands in the same
    ``PackageMetrics``. Not synchronized; see ``merge`` for combining the
    results of separate collectors.
    """

    def __init__(self) -> None:
        self._packages: dict[str, PackageMetrics] = {}
        self._modular_units: list[ModularCompilationUnitMetrics] = []

    def maybe_create_package(self, name: str) -> PackageMetrics:
        """Get the package with ``name``, creating it on first use."""
        package = self._packages.get(name)
        if package is None:
            package = PackageMetrics(name)
            self._packages[name] = package
        return package

    def add(self, metrics: ModularCompilationUnitMetrics) -> None:
        self._modular_units.append(metrics)

    def merge(self, other: JavaMetrics) -> None:
        """Move the contents of another root into this one."""
        for package in other.packages:
            target = self.maybe_create_package(package.name)
            target.comments.add(package.comments)
            target.compilation_units.extend(package.compilation_units)
        self._modular_units.extend(other.modular_compilation_units)

    @property
    def packages(self) -> list[PackageMetrics]:
        return list(self._packages.values())

    @property
    def modular_compilation_units(self) -> list[ModularCompilationUnitMetrics]:
        return list(self._modular_units)

    @property
    def num_packages(self) -> int:
        return len(self._packages)

    @property
    def is_empty(self) -> bool:
        return not self._packages and not self._modular_units

    def __iter__(self) -> Iterator[PackageMetrics]:
        return iter(self._packages.values())
