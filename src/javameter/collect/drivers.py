"""Traversal drivers: one per declaration level.

A ``UnitMetricsCollector`` builds the metrics subtree of a single
compilation unit. It never touches the shared ``JavaMetrics``; merging the
finished subtree is left to ``JavaMetricsCollector`` so a failure leaves
nothing half-merged.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..exceptions import UnclassifiedNodeError
from ..logging_config import get_logger
from ..metrics import (
    CommentMetrics,
    CompilationUnitMetrics,
    FieldMetrics,
    MethodMetrics,
    ModularCompilationUnitMetrics,
    ModuleDeclarationMetrics,
    TypeMetrics,
)
from ..syntax.nodes import (
    AnnotationMemberDeclaration,
    CompilationUnit,
    ConstructorDeclaration,
    DirectiveKind,
    EnumConstantDeclaration,
    EnumDeclaration,
    FieldDeclaration,
    InitializerDeclaration,
    MethodDeclaration,
    ModuleDeclaration,
    Node,
    ObjectCreationExpr,
    TypeDeclaration,
)
from .attribution import CommentLedger
from .kinds import field_kind, method_kind, method_name, type_kind, type_name
from .statements import StatementWalker

logger = get_logger(__name__)


@dataclass
class CollectedUnit:
    """Metrics of an ordinary compilation unit, ready to be merged.

    ``package_comments`` holds the package declaration's comments when they
    belong to the package rather than to the unit.
    """

    package_name: str
    metrics: CompilationUnitMetrics
    package_comments: CommentMetrics = field(default_factory=CommentMetrics)


class UnitMetricsCollector:
    """Collects the metrics of one compilation unit."""

    def __init__(self) -> None:
        self.ledger = CommentLedger()

    # ------------------------------------------------------------------
    # Compilation units
    # ------------------------------------------------------------------

    def collect_compilation_unit(self, unit: CompilationUnit, name: str) -> CollectedUnit:
        if unit.module is not None:
            raise UnclassifiedNodeError(unit, "ordinary compilation unit")

        metrics = CompilationUnitMetrics(name)
        for declaration in unit.types:
            metrics.add_type(self.collect_type(declaration, unit))

        collected = CollectedUnit(unit.package.name if unit.package else "", metrics)
        if unit.package is not None:
            if unit.types:
                self.ledger.collect_own(unit.package, metrics.comments)
            else:
                # A unit without types (package-info) documents the package.
                self.ledger.collect_adjacent_orphans(unit.package, unit, collected.package_comments)
                self.ledger.collect_own(unit.package, collected.package_comments)

        self._collect_unit_comments(unit, metrics.comments)
        logger.debug("Collected %s: %d types", name, len(metrics.types))
        return collected

    def collect_modular_compilation_unit(
        self, unit: CompilationUnit, name: str
    ) -> ModularCompilationUnitMetrics:
        module = unit.module
        if module is None:
            raise UnclassifiedNodeError(unit, "modular compilation unit")

        metrics = ModularCompilationUnitMetrics(name, self.collect_module(module, unit))
        self._collect_unit_comments(unit, metrics.comments)
        logger.debug("Collected module %s from %s", module.name, name)
        return metrics

    def _collect_unit_comments(self, unit: CompilationUnit, into: CommentMetrics) -> None:
        for declaration in unit.imports:
            self.ledger.collect_own(declaration, into)
        self.ledger.collect_own(unit, into)
        # Anything left anywhere in the unit belongs to the unit.
        self.ledger.collect_subtree(unit, into)

    def collect_module(self, module: ModuleDeclaration, parent: Node) -> ModuleDeclarationMetrics:
        metrics = ModuleDeclarationMetrics(module.name, is_open=module.is_open)
        self.ledger.collect_adjacent_orphans(module, parent, metrics.comments)

        for directive in module.directives:
            match directive.kind:
                case DirectiveKind.REQUIRES:
                    metrics.requires += 1
                case DirectiveKind.EXPORTS:
                    metrics.exports += 1
                case DirectiveKind.OPENS:
                    metrics.opens += 1
                case DirectiveKind.USES:
                    metrics.uses += 1
                case DirectiveKind.PROVIDES:
                    metrics.provides += 1
            self.ledger.collect_own(directive, metrics.comments)

        self.ledger.collect_own(module, metrics.comments)
        return metrics

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def collect_type(self, node: Node, parent: Node) -> TypeMetrics:
        """Collect a type declaration, an enum constant with a body or an
        anonymous class creation."""
        metrics = TypeMetrics(type_name(node), type_kind(node))
        self.ledger.collect_adjacent_orphans(node, parent, metrics.comments)

        match node:
            case EnumDeclaration(constants=constants, members=members):
                body = [*constants, *members]
            case TypeDeclaration(members=members):
                body = list(members)
            case EnumConstantDeclaration(arguments=arguments, body=members):
                # Arguments hold no statements of any collected element.
                walker = StatementWalker(
                    self.ledger, None, metrics.comments, self._inner_type_handler(metrics)
                )
                for argument in arguments:
                    walker.walk(argument, node)
                body = list(members or [])
            case ObjectCreationExpr(body=members):
                body = list(members or [])
            case _:
                raise UnclassifiedNodeError(node, "type")

        for member in body:
            self._collect_member(member, node, metrics)

        self.ledger.collect_own(node, metrics.comments)
        return metrics

    def _collect_member(self, member: Node, enclosing: Node, metrics: TypeMetrics) -> None:
        match member:
            case FieldDeclaration():
                for field_metrics in self.collect_fields(member, enclosing, metrics):
                    metrics.add_field(field_metrics)
            case MethodDeclaration() | ConstructorDeclaration() | InitializerDeclaration():
                metrics.add_method(self.collect_method(member, enclosing))
            case EnumConstantDeclaration(body=None) | AnnotationMemberDeclaration():
                metrics.add_field(self.collect_field_like(member, enclosing, metrics))
            case EnumConstantDeclaration() | TypeDeclaration():
                metrics.add_inner_type(self.collect_type(member, enclosing))
            case _:
                raise UnclassifiedNodeError(member, "type member")

    def _inner_type_handler(self, metrics: TypeMetrics):
        def handle(node: Node, parent: Node) -> None:
            metrics.add_inner_type(self.collect_type(node, parent))

        return handle

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def collect_method(self, node: Node, enclosing: Node) -> MethodMetrics:
        metrics = MethodMetrics(method_name(node), method_kind(node, enclosing))
        self.ledger.collect_adjacent_orphans(node, enclosing, metrics.comments)

        def handle_local_type(type_node: Node, parent: Node) -> None:
            metrics.add_local_type(self.collect_type(type_node, parent))

        body = getattr(node, "body", None)
        if body is not None:
            walker = StatementWalker(self.ledger, metrics.statements, metrics.comments, handle_local_type)
            walker.walk(body, node)

        self.ledger.collect_own(node, metrics.comments)
        # Comments in parameters, blocks and expressions belong to the method.
        self.ledger.collect_subtree(node, metrics.comments)
        return metrics

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def collect_fields(
        self, declaration: FieldDeclaration, enclosing: Node, type_metrics: TypeMetrics
    ) -> list[FieldMetrics]:
        """One ``FieldMetrics`` per declarator.

        The comments of the declaration as a whole go to the first
        declarator; every declarator then claims the orphans of the
        declaration that are adjacent to it.
        """
        kind = field_kind(declaration, enclosing)
        inner_types = self._inner_type_handler(type_metrics)

        result: list[FieldMetrics] = []
        for declarator in declaration.variables:
            metrics = FieldMetrics(declarator.name, kind)
            if not result:
                self.ledger.collect_adjacent_orphans(declaration, enclosing, metrics.comments)
                self.ledger.collect_attached(declaration, metrics.comments)
            self.ledger.collect_adjacent_orphans(declarator, declaration, metrics.comments)

            if declarator.initializer is not None:
                # The initializer is one statement however much code it holds.
                metrics.statements.add(1)
                walker = StatementWalker(self.ledger, None, metrics.comments, inner_types)
                walker.walk(declarator.initializer, declarator)
            self.ledger.collect_own(declarator, metrics.comments)
            result.append(metrics)

        if result:
            self.ledger.collect_own(declaration, result[0].comments)
        return result

    def collect_field_like(self, node: Node, enclosing: Node, type_metrics: TypeMetrics) -> FieldMetrics:
        """An enum constant without a body or an annotation type element."""
        metrics = FieldMetrics(node.name, field_kind(node, enclosing))  # type: ignore[attr-defined]
        self.ledger.collect_adjacent_orphans(node, enclosing, metrics.comments)

        # Only the default value is counted; code inside it or in enum
        # constant arguments is walked for comments and types alone.
        walker = StatementWalker(
            self.ledger, None, metrics.comments, self._inner_type_handler(type_metrics)
        )
        match node:
            case AnnotationMemberDeclaration(default_value=default_value):
                if default_value is not None:
                    # A default value counts like a field initializer.
                    metrics.statements.add(1)
                    walker.walk(default_value, node)
            case EnumConstantDeclaration(arguments=arguments):
                for argument in arguments:
                    walker.walk(argument, node)

        self.ledger.collect_own(node, metrics.comments)
        return metrics
