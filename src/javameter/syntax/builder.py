"""Conversion of tree-sitter-java concrete syntax trees into ``syntax.nodes``.

Expressions are kept opaque except where they can hold code that the
collectors count: lambdas, object creations with an anonymous class body
and switch expressions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from ..exceptions import ParsingError
from .language_level import JavaLanguageLevel, LanguageFeature
from .nodes import (
    AnnotationDeclaration,
    AnnotationMemberDeclaration,
    AssertStmt,
    Block,
    BreakStmt,
    CatchClause,
    ClassDeclaration,
    Comment,
    CommentKind,
    CompilationUnit,
    ConstructorDeclaration,
    ContinueStmt,
    DirectiveKind,
    DoStmt,
    EmptyStmt,
    EnumConstantDeclaration,
    EnumDeclaration,
    ExplicitConstructorInvocationStmt,
    Expression,
    ExpressionStmt,
    FieldDeclaration,
    ForEachStmt,
    ForStmt,
    IfStmt,
    ImportDeclaration,
    InitializerDeclaration,
    InterfaceDeclaration,
    LabeledStmt,
    LambdaExpr,
    LocalVariableDeclaration,
    MethodDeclaration,
    Modifier,
    ModuleDeclaration,
    ModuleDirective,
    Node,
    ObjectCreationExpr,
    OpaqueExpr,
    PackageDeclaration,
    Parameter,
    Range,
    RecordDeclaration,
    Resource,
    ReturnStmt,
    SwitchEntry,
    SwitchExpr,
    SwitchStmt,
    SynchronizedStmt,
    ThrowStmt,
    TryStmt,
    TypeDeclaration,
    VariableDeclarator,
    WhileStmt,
    YieldStmt,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

COMMENT_TYPES = frozenset({"line_comment", "block_comment", "comment"})

TYPE_DECLARATION_TYPES = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "annotation_type_declaration",
        "record_declaration",
    }
)

# Parents under which a switch is a statement rather than an expression.
STATEMENT_PARENT_TYPES = frozenset(
    {
        "program",
        "block",
        "constructor_body",
        "switch_block_statement_group",
        "labeled_statement",
        "if_statement",
        "while_statement",
        "for_statement",
        "enhanced_for_statement",
        "do_statement",
    }
)

DIRECTIVE_KINDS = {kind.value: kind for kind in DirectiveKind}


def node_range(node: TSNode) -> Range:
    """1-based range; the end column is the last column the node covers."""
    begin_row, begin_column = node.start_point
    end_row, end_column = node.end_point
    return Range.of(begin_row + 1, begin_column + 1, end_row + 1, end_column)


def make_comment(node: TSNode, text: str) -> Comment:
    if text.startswith("//"):
        return Comment(CommentKind.LINE, text[2:], node_range(node))
    if text.startswith("/**") and text != "/**/":
        return Comment(CommentKind.DOC, text[3:-2], node_range(node))
    return Comment(CommentKind.BLOCK, text[2:-2], node_range(node))


class SyntaxTreeBuilder:
    """Builds the syntax tree of one compilation unit.

    Args:
        unit_name: Name used in error reports
        language_level: Newest Java release whose syntax is accepted
        enable_preview: Also accept that release's preview features
    """

    def __init__(
        self,
        unit_name: str,
        language_level: JavaLanguageLevel = JavaLanguageLevel.default(),
        enable_preview: bool = False,
    ) -> None:
        self.unit_name = unit_name
        self.language_level = language_level
        self.enable_preview = enable_preview

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def build(self, root: TSNode) -> tuple[CompilationUnit, list[Comment]]:
        """Convert a ``program`` node; returns the unit and all its comments."""
        self._check_syntax(root)

        # The unit spans the whole source, including leading and trailing comments.
        end_row, end_column = root.end_point
        unit = CompilationUnit(Range.of(1, 1, end_row + 1, end_column))
        comments: list[Comment] = []
        for node in _descendants(root):
            if node.type in COMMENT_TYPES:
                comments.append(make_comment(node, self._text(node)))
            else:
                self._check_features(node)

        for child in root.named_children:
            if child.type in COMMENT_TYPES:
                continue
            if child.type == "package_declaration":
                unit.package = PackageDeclaration(node_range(child), self._qualified_name(child))
            elif child.type == "import_declaration":
                unit.imports.append(self._import(child))
            elif child.type == "module_declaration":
                unit.module = self._module(child)
            elif child.type in TYPE_DECLARATION_TYPES:
                unit.types.append(self._type_declaration(child))
            else:
                raise self._error(child, f"unexpected {child.type} outside of a type declaration")

        if unit.module is not None and (unit.types or unit.package is not None):
            raise ParsingError(
                self.unit_name, "a module declaration cannot share its unit with types or a package"
            )
        return unit, comments

    def _check_syntax(self, root: TSNode) -> None:
        if not root.has_error:
            return
        for node in _descendants(root):
            if node.is_missing:
                raise self._error(node, f"missing {node.type}")
            if node.type == "ERROR":
                snippet = " ".join(self._text(node).split())[:40]
                raise self._error(node, f"syntax error at '{snippet}'")
        raise ParsingError(self.unit_name, "syntax error")

    def _check_features(self, node: TSNode) -> None:
        feature: Optional[LanguageFeature] = None
        node_type = node.type
        if node_type == "module_declaration":
            feature = LanguageFeature.MODULES
        elif node_type == "record_declaration":
            feature = LanguageFeature.RECORDS
        elif node_type == "yield_statement":
            feature = LanguageFeature.YIELD
        elif node_type == "switch_rule":
            feature = LanguageFeature.SWITCH_EXPRESSIONS
        elif node_type == "switch_expression":
            if node.parent is not None and node.parent.type not in STATEMENT_PARENT_TYPES:
                feature = LanguageFeature.SWITCH_EXPRESSIONS
        elif node_type in ("text_block", "string_literal"):
            if self._text(node).startswith('"""'):
                feature = LanguageFeature.TEXT_BLOCKS
        elif node_type == "instanceof_expression":
            if node.child_by_field_name("name") is not None or any(
                c.type in ("type_pattern", "record_pattern") for c in node.named_children
            ):
                feature = LanguageFeature.INSTANCEOF_PATTERNS
        elif node_type == "permits" or node_type in ("sealed", "non-sealed"):
            feature = LanguageFeature.SEALED_CLASSES
        elif node_type == "method_declaration":
            if (
                node.parent is not None
                and node.parent.type == "interface_body"
                and Modifier.PRIVATE in self._modifiers(node)
            ):
                feature = LanguageFeature.PRIVATE_INTERFACE_METHODS

        if feature is not None and not feature.is_supported(self.language_level, self.enable_preview):
            suffix = " with preview features enabled" if self.enable_preview else ""
            raise self._error(
                node, f"{feature.description} are not supported in {self.language_level}{suffix}"
            )

    # ------------------------------------------------------------------
    # Compilation unit level
    # ------------------------------------------------------------------

    def _import(self, node: TSNode) -> ImportDeclaration:
        child_types = {child.type for child in node.children}
        return ImportDeclaration(
            node_range(node),
            self._qualified_name(node),
            is_static="static" in child_types,
            is_wildcard="asterisk" in child_types,
        )

    def _module(self, node: TSNode) -> ModuleDeclaration:
        name_node = node.child_by_field_name("name")
        name = self._text(name_node) if name_node is not None else self._qualified_name(node)
        module = ModuleDeclaration(
            node_range(node), name, is_open=any(c.type == "open" for c in node.children)
        )
        body = node.child_by_field_name("body")
        if body is not None:
            for child in body.named_children:
                if child.type not in COMMENT_TYPES:
                    module.directives.append(self._directive(child))
        return module

    def _directive(self, node: TSNode) -> ModuleDirective:
        if node.type.endswith("_module_directive"):
            keyword = node.type[: -len("_module_directive")]
        else:
            # Older grammars wrap every directive in a plain module_directive.
            inner = [c for c in node.named_children if c.type.endswith("_module_directive")]
            if inner:
                return self._directive(inner[0])
            keyword = node.children[0].type if node.children else ""
        kind = DIRECTIVE_KINDS.get(keyword)
        if kind is None:
            raise self._error(node, f"unknown module directive '{keyword}'")
        names = [self._text(c) for c in node.named_children if c.type in ("identifier", "scoped_identifier")]
        return ModuleDirective(node_range(node), kind, names[0] if names else "")

    # ------------------------------------------------------------------
    # Types and members
    # ------------------------------------------------------------------

    def _type_declaration(self, node: TSNode) -> TypeDeclaration:
        name = self._field_text(node, "name")
        modifiers = self._modifiers(node)
        body = node.child_by_field_name("body")
        rng = node_range(node)

        if node.type == "class_declaration":
            return ClassDeclaration(rng, name, modifiers, self._members(body))
        if node.type == "interface_declaration":
            return InterfaceDeclaration(rng, name, modifiers, self._members(body))
        if node.type == "annotation_type_declaration":
            return AnnotationDeclaration(rng, name, modifiers, self._members(body))
        if node.type == "enum_declaration":
            constants = []
            members: list[Node] = []
            if body is not None:
                for child in body.named_children:
                    if child.type == "enum_constant":
                        constants.append(self._enum_constant(child))
                    elif child.type == "enum_body_declarations":
                        members.extend(self._members(child))
            return EnumDeclaration(rng, name, modifiers, members, constants=constants)
        if node.type == "record_declaration":
            components = self._parameters(node.child_by_field_name("parameters"))
            return RecordDeclaration(
                rng, name, modifiers, self._members(body, components), components=components
            )
        raise self._error(node, f"unexpected type declaration {node.type}")

    def _members(self, body: Optional[TSNode], record_components: Optional[list[Parameter]] = None) -> list[Node]:
        if body is None:
            return []
        members: list[Node] = []
        for child in body.named_children:
            node_type = child.type
            if node_type in COMMENT_TYPES:
                continue
            if node_type in ("field_declaration", "constant_declaration"):
                members.append(self._field(child))
            elif node_type == "method_declaration":
                members.append(self._method(child))
            elif node_type == "constructor_declaration":
                members.append(
                    ConstructorDeclaration(
                        node_range(child),
                        self._field_text(child, "name"),
                        parameters=self._parameters(child.child_by_field_name("parameters")),
                        body=self._block(child.child_by_field_name("body")),
                        modifiers=self._modifiers(child),
                    )
                )
            elif node_type == "compact_constructor_declaration":
                members.append(
                    ConstructorDeclaration(
                        node_range(child),
                        self._field_text(child, "name"),
                        parameters=list(record_components or []),
                        body=self._block(child.child_by_field_name("body")),
                        modifiers=self._modifiers(child),
                    )
                )
            elif node_type == "static_initializer":
                block = next(c for c in child.named_children if c.type == "block")
                members.append(InitializerDeclaration(node_range(child), self._block(block), is_static=True))
            elif node_type == "block":
                members.append(InitializerDeclaration(node_range(child), self._block(child)))
            elif node_type == "annotation_type_element_declaration":
                members.append(self._annotation_member(child))
            elif node_type in TYPE_DECLARATION_TYPES:
                members.append(self._type_declaration(child))
            elif node_type in ("enum_constant", "enum_body_declarations"):
                raise self._error(child, f"unexpected {node_type} outside of an enum body")
            else:
                raise self._error(child, f"unexpected member {node_type}")
        return members

    def _field(self, node: TSNode) -> FieldDeclaration:
        return FieldDeclaration(
            node_range(node),
            self._field_text(node, "type"),
            variables=self._declarators(node),
            modifiers=self._modifiers(node),
        )

    def _declarators(self, node: TSNode) -> list[VariableDeclarator]:
        declarators = []
        for child in node.children_by_field_name("declarator"):
            value = child.child_by_field_name("value")
            declarators.append(
                VariableDeclarator(
                    node_range(child),
                    self._field_text(child, "name"),
                    initializer=self._expression(value) if value is not None else None,
                )
            )
        return declarators

    def _method(self, node: TSNode) -> MethodDeclaration:
        body = node.child_by_field_name("body")
        return_type = self._field_text(node, "type")
        dimensions = node.child_by_field_name("dimensions")
        if dimensions is not None:
            return_type += self._text(dimensions)
        return MethodDeclaration(
            node_range(node),
            self._field_text(node, "name"),
            parameters=self._parameters(node.child_by_field_name("parameters")),
            body=self._block(body) if body is not None else None,
            modifiers=self._modifiers(node),
            return_type=return_type,
        )

    def _enum_constant(self, node: TSNode) -> EnumConstantDeclaration:
        arguments = node.child_by_field_name("arguments")
        body = node.child_by_field_name("body")
        return EnumConstantDeclaration(
            node_range(node),
            self._field_text(node, "name"),
            arguments=self._arguments(arguments),
            body=self._members(body) if body is not None else None,
        )

    def _annotation_member(self, node: TSNode) -> AnnotationMemberDeclaration:
        value = node.child_by_field_name("value")
        if value is None:
            after_default = False
            for child in node.children:
                if child.type == "default":
                    after_default = True
                elif after_default and child.is_named and child.type not in COMMENT_TYPES:
                    value = child
                    break
        return AnnotationMemberDeclaration(
            node_range(node),
            self._field_text(node, "name"),
            self._field_text(node, "type"),
            default_value=self._expression(value) if value is not None else None,
            modifiers=self._modifiers(node),
        )

    def _parameters(self, node: Optional[TSNode]) -> list[Parameter]:
        if node is None:
            return []
        parameters = []
        for child in node.named_children:
            if child.type == "formal_parameter":
                type_name = self._field_text(child, "type")
                dimensions = child.child_by_field_name("dimensions")
                if dimensions is not None:
                    type_name += self._text(dimensions)
                parameters.append(Parameter(type_name, self._field_text(child, "name")))
            elif child.type == "spread_parameter":
                parts = [c for c in child.named_children if c.type not in COMMENT_TYPES and c.type != "modifiers"]
                declarator = parts[-1]
                name_node = declarator.child_by_field_name("name")
                name = self._text(name_node if name_node is not None else declarator)
                parameters.append(Parameter(self._type_text(parts[0]) + "...", name))
        return parameters

    def _modifiers(self, node: TSNode) -> frozenset[Modifier]:
        modifiers = set()
        for child in node.children:
            if child.type == "modifiers":
                for keyword in child.children:
                    modifier = Modifier.from_keyword(keyword.type)
                    if modifier is not None:
                        modifiers.add(modifier)
        return frozenset(modifiers)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _block(self, node: TSNode) -> Block:
        return Block(node_range(node), statements=self._statement_list(node, skip=("{", "}")))

    def _statement_list(self, node: TSNode, skip: tuple[str, ...]) -> list[Node]:
        statements: list[Node] = []
        for child in node.children:
            if child.type in skip or child.type in COMMENT_TYPES:
                continue
            if child.type == "switch_label":
                continue
            statements.append(self._statement(child))
        return statements

    def _statement(self, node: TSNode) -> Node:
        node_type = node.type
        rng = node_range(node)

        if node_type == "block":
            return self._block(node)
        if node_type == ";":
            return EmptyStmt(rng)
        if node_type in TYPE_DECLARATION_TYPES:
            return self._type_declaration(node)
        if node_type == "expression_statement":
            return ExpressionStmt(rng, self._expression(self._first_named(node)))
        if node_type == "local_variable_declaration":
            return LocalVariableDeclaration(rng, self._field_text(node, "type"), self._declarators(node))
        if node_type == "labeled_statement":
            label = next(c for c in node.named_children if c.type == "identifier")
            return LabeledStmt(rng, self._text(label), self._statement(node.children[-1]))
        if node_type == "if_statement":
            alternative = node.child_by_field_name("alternative")
            return IfStmt(
                rng,
                self._expression(node.child_by_field_name("condition")),
                self._statement(node.child_by_field_name("consequence")),
                self._statement(alternative) if alternative is not None else None,
            )
        if node_type == "while_statement":
            return WhileStmt(
                rng,
                self._expression(node.child_by_field_name("condition")),
                self._statement(node.child_by_field_name("body")),
            )
        if node_type == "do_statement":
            return DoStmt(
                rng,
                self._statement(node.child_by_field_name("body")),
                self._expression(node.child_by_field_name("condition")),
            )
        if node_type == "for_statement":
            condition = node.child_by_field_name("condition")
            init: list[Node] = []
            for part in node.children_by_field_name("init"):
                if part.type == "local_variable_declaration":
                    init.append(self._statement(part))
                else:
                    init.append(self._expression(part))
            return ForStmt(
                rng,
                self._statement(node.child_by_field_name("body")),
                init=init,
                condition=self._expression(condition) if condition is not None else None,
                update=[self._expression(u) for u in node.children_by_field_name("update")],
            )
        if node_type == "enhanced_for_statement":
            return ForEachStmt(
                rng,
                Parameter(self._field_text(node, "type"), self._field_text(node, "name")),
                self._expression(node.child_by_field_name("value")),
                self._statement(node.child_by_field_name("body")),
            )
        if node_type == "assert_statement":
            parts = self._named(node)
            return AssertStmt(
                rng,
                self._expression(parts[0]),
                self._expression(parts[1]) if len(parts) > 1 else None,
            )
        if node_type == "break_statement":
            return BreakStmt(rng, self._optional_identifier(node))
        if node_type == "continue_statement":
            return ContinueStmt(rng, self._optional_identifier(node))
        if node_type == "return_statement":
            parts = self._named(node)
            return ReturnStmt(rng, self._expression(parts[0]) if parts else None)
        if node_type == "yield_statement":
            return YieldStmt(rng, self._expression(self._first_named(node)))
        if node_type == "throw_statement":
            return ThrowStmt(rng, self._expression(self._first_named(node)))
        if node_type == "synchronized_statement":
            parts = self._named(node)
            return SynchronizedStmt(
                rng, self._expression(parts[0]), self._block(node.child_by_field_name("body"))
            )
        if node_type in ("try_statement", "try_with_resources_statement"):
            return self._try(node)
        if node_type == "switch_expression":
            return SwitchStmt(
                rng,
                self._expression(node.child_by_field_name("condition")),
                self._switch_entries(node.child_by_field_name("body")),
            )
        if node_type == "explicit_constructor_invocation":
            constructor = node.child_by_field_name("constructor")
            return ExplicitConstructorInvocationStmt(
                rng,
                is_this=constructor is not None and constructor.type == "this",
                arguments=self._arguments(node.child_by_field_name("arguments")),
            )
        raise self._error(node, f"unsupported statement {node_type}")

    def _try(self, node: TSNode) -> TryStmt:
        resources = []
        specification = node.child_by_field_name("resources")
        if specification is not None:
            for resource in self._named(specification):
                value = resource.child_by_field_name("value")
                name_node = resource.child_by_field_name("name")
                resources.append(
                    Resource(
                        node_range(resource),
                        self._text(name_node if name_node is not None else resource),
                        initializer=self._expression(value) if value is not None else None,
                    )
                )

        catch_clauses = []
        finally_block = None
        for child in node.named_children:
            if child.type == "catch_clause":
                parameter = next(c for c in child.named_children if c.type == "catch_formal_parameter")
                catch_type = next(c for c in parameter.named_children if c.type == "catch_type")
                catch_clauses.append(
                    CatchClause(
                        node_range(child),
                        Parameter(self._type_text(catch_type), self._field_text(parameter, "name")),
                        self._block(child.child_by_field_name("body")),
                    )
                )
            elif child.type == "finally_clause":
                finally_block = self._block(next(c for c in child.named_children if c.type == "block"))

        return TryStmt(
            node_range(node),
            self._block(node.child_by_field_name("body")),
            resources=resources,
            catch_clauses=catch_clauses,
            finally_block=finally_block,
        )

    def _switch_entries(self, body: TSNode) -> list[SwitchEntry]:
        entries: list[SwitchEntry] = []
        for child in body.named_children:
            if child.type == "switch_block_statement_group":
                labels = [c for c in child.named_children if c.type == "switch_label"]
                statements = self._statement_list(child, skip=(":", "->"))
                for index, label in enumerate(labels):
                    is_last = index == len(labels) - 1
                    rng = node_range(label)
                    if is_last:
                        rng = Range(rng.begin, node_range(child).end)
                    entries.append(self._switch_entry(label, rng, statements if is_last else []))
            elif child.type == "switch_rule":
                label = next(c for c in child.named_children if c.type == "switch_label")
                statements = self._statement_list(child, skip=(":", "->"))
                entries.append(self._switch_entry(label, node_range(child), statements))
        return entries

    def _switch_entry(self, label: TSNode, rng: Range, statements: list[Node]) -> SwitchEntry:
        return SwitchEntry(
            rng,
            labels=[self._expression(c) for c in self._named(label)],
            statements=statements,
            is_default=any(c.type == "default" for c in label.children),
        )

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _expression(self, node: TSNode) -> Expression:
        node_type = node.type
        rng = node_range(node)
        if node_type == "lambda_expression":
            body = node.child_by_field_name("body")
            if body.type == "block":
                return LambdaExpr(rng, self._block(body))
            return LambdaExpr(rng, self._expression(body))
        if node_type == "switch_expression":
            return SwitchExpr(
                rng,
                self._expression(node.child_by_field_name("condition")),
                self._switch_entries(node.child_by_field_name("body")),
            )
        if node_type == "object_creation_expression":
            class_body = next((c for c in node.named_children if c.type == "class_body"), None)
            if class_body is not None:
                return ObjectCreationExpr(
                    rng,
                    self._field_text(node, "type"),
                    arguments=self._arguments(node.child_by_field_name("arguments")),
                    body=self._members(class_body),
                )
        return OpaqueExpr(rng, nested=self._nested_code(node))

    def _nested_code(self, node: TSNode) -> list[Expression]:
        """Outermost code-holding expressions below ``node``, in source order."""
        found: list[Expression] = []
        stack = list(reversed(node.named_children))
        while stack:
            current = stack.pop()
            if current.type == "lambda_expression" or current.type == "switch_expression":
                found.append(self._expression(current))
            elif current.type == "object_creation_expression" and any(
                c.type == "class_body" for c in current.named_children
            ):
                found.append(self._expression(current))
            else:
                stack.extend(reversed(current.named_children))
        return found

    def _arguments(self, node: Optional[TSNode]) -> list[Expression]:
        if node is None:
            return []
        return [self._expression(c) for c in self._named(node)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _text(self, node: TSNode) -> str:
        return node.text.decode("utf-8", errors="replace") if node.text is not None else ""

    def _type_text(self, node: TSNode) -> str:
        return " ".join(self._text(node).split())

    def _field_text(self, node: TSNode, field_name: str) -> str:
        child = node.child_by_field_name(field_name)
        if child is None:
            raise self._error(node, f"{node.type} without {field_name}")
        return self._type_text(child)

    def _qualified_name(self, node: TSNode) -> str:
        for child in node.named_children:
            if child.type in ("identifier", "scoped_identifier"):
                return self._text(child)
        return ""

    def _optional_identifier(self, node: TSNode) -> Optional[str]:
        for child in node.named_children:
            if child.type == "identifier":
                return self._text(child)
        return None

    def _named(self, node: TSNode) -> list[TSNode]:
        return [c for c in node.named_children if c.type not in COMMENT_TYPES]

    def _first_named(self, node: TSNode) -> TSNode:
        parts = self._named(node)
        if not parts:
            raise self._error(node, f"empty {node.type}")
        return parts[0]

    def _error(self, node: TSNode, reason: str) -> ParsingError:
        return ParsingError(self.unit_name, reason, node.start_point[0] + 1)


def _descendants(root: TSNode) -> Iterator[TSNode]:
    """Pre-order walk without recursion; deep expression trees are common."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
