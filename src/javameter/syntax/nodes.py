"""Syntax tree consumed by the metrics collector.

The tree is a closed set of dataclasses; collectors dispatch on it with
``match`` statements and treat any class they do not list as a logic error.

Every node carries three comment slots filled by ``syntax.comments``:
    - comment: the comment directly preceding (or trailing on the same
      line as) the node
    - orphan_comments: comments inside the node that could not be placed
      on any child
    - doc_comment: only on documentable declarations, a ``/** */`` comment
      directly preceding the declaration

The collectors never modify these slots; consumption is tracked separately
by ``collect.attribution.CommentLedger``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union


@dataclass(frozen=True, order=True)
class Position:
    """A 1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True)
class Range:
    begin: Position
    end: Position

    @classmethod
    def of(cls, begin_line: int, begin_column: int, end_line: int, end_column: int) -> Range:
        return cls(Position(begin_line, begin_column), Position(end_line, end_column))

    def contains(self, other: Range) -> bool:
        return self.begin <= other.begin and other.end <= self.end


class CommentKind(Enum):
    LINE = "line"
    BLOCK = "block"
    DOC = "doc"


@dataclass(eq=False)
class Comment:
    """A source comment.

    ``content`` is the text between the delimiters. Comments compare by
    identity so they can be tracked in sets.
    """

    kind: CommentKind
    content: str
    range: Range

    @property
    def begin_line(self) -> int:
        return self.range.begin.line

    @property
    def end_line(self) -> int:
        return self.range.end.line


class Modifier(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    STATIC = "static"
    FINAL = "final"
    SEALED = "sealed"
    NON_SEALED = "non-sealed"
    STRICTFP = "strictfp"
    DEFAULT = "default"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    TRANSIENT = "transient"
    VOLATILE = "volatile"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional[Modifier]:
        try:
            return cls(keyword)
        except ValueError:
            return None


Modifiers = frozenset


def _present(*nodes: Optional[Node]) -> list[Node]:
    return [n for n in nodes if n is not None]


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Node:
    range: Range
    comment: Optional[Comment] = field(default=None, kw_only=True)
    orphan_comments: list[Comment] = field(default_factory=list, kw_only=True)

    @property
    def begin_line(self) -> int:
        return self.range.begin.line

    @property
    def end_line(self) -> int:
        return self.range.end.line

    def children(self) -> list[Node]:
        """Direct child nodes in source order."""
        return []

    def own_comments(self) -> list[Comment]:
        """Comments held directly by this node, in source order."""
        comments = list(self.orphan_comments)
        if self.comment is not None:
            comments.append(self.comment)
        return sorted(comments, key=lambda c: c.range.begin)

    def walk(self) -> Iterator[Node]:
        """Pre-order iteration over this node and all of its descendants."""
        yield self
        for child in self.children():
            yield from child.walk()


@dataclass(eq=False)
class DocumentableNode(Node):
    doc_comment: Optional[Comment] = field(default=None, kw_only=True)

    def own_comments(self) -> list[Comment]:
        comments = super().own_comments()
        if self.doc_comment is not None:
            comments.append(self.doc_comment)
            comments.sort(key=lambda c: c.range.begin)
        return comments


@dataclass(eq=False)
class Statement(Node):
    pass


@dataclass(eq=False)
class Expression(Node):
    pass


# ---------------------------------------------------------------------------
# Compilation units and modules
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class PackageDeclaration(Node):
    name: str


@dataclass(eq=False)
class ImportDeclaration(Node):
    name: str
    is_static: bool = False
    is_wildcard: bool = False


class DirectiveKind(Enum):
    REQUIRES = "requires"
    EXPORTS = "exports"
    OPENS = "opens"
    USES = "uses"
    PROVIDES = "provides"


@dataclass(eq=False)
class ModuleDirective(Node):
    kind: DirectiveKind
    name: str


@dataclass(eq=False)
class ModuleDeclaration(Node):
    name: str
    is_open: bool = False
    directives: list[ModuleDirective] = field(default_factory=list)

    def children(self) -> list[Node]:
        return list(self.directives)


@dataclass(eq=False)
class CompilationUnit(Node):
    package: Optional[PackageDeclaration] = None
    imports: list[ImportDeclaration] = field(default_factory=list)
    types: list[TypeDeclaration] = field(default_factory=list)
    module: Optional[ModuleDeclaration] = None

    def children(self) -> list[Node]:
        return [*_present(self.package), *self.imports, *_present(self.module), *self.types]


# ---------------------------------------------------------------------------
# Type declarations and members
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parameter:
    """A formal parameter; ``type_name`` already includes ``...`` for varargs."""

    type_name: str
    name: str


@dataclass(eq=False)
class TypeDeclaration(DocumentableNode):
    name: str
    modifiers: Modifiers = frozenset()
    members: list[Node] = field(default_factory=list)

    def children(self) -> list[Node]:
        return list(self.members)


@dataclass(eq=False)
class ClassDeclaration(TypeDeclaration):
    pass


@dataclass(eq=False)
class InterfaceDeclaration(TypeDeclaration):
    pass


@dataclass(eq=False)
class AnnotationDeclaration(TypeDeclaration):
    pass


@dataclass(eq=False)
class EnumDeclaration(TypeDeclaration):
    constants: list[EnumConstantDeclaration] = field(default_factory=list)

    def children(self) -> list[Node]:
        return [*self.constants, *self.members]


@dataclass(eq=False)
class RecordDeclaration(TypeDeclaration):
    components: list[Parameter] = field(default_factory=list)


@dataclass(eq=False)
class VariableDeclarator(Node):
    name: str
    initializer: Optional[Expression] = None

    def children(self) -> list[Node]:
        return _present(self.initializer)


@dataclass(eq=False)
class FieldDeclaration(DocumentableNode):
    type_name: str
    variables: list[VariableDeclarator] = field(default_factory=list)
    modifiers: Modifiers = frozenset()

    def children(self) -> list[Node]:
        return list(self.variables)


@dataclass(eq=False)
class CallableDeclaration(DocumentableNode):
    name: str
    parameters: list[Parameter] = field(default_factory=list)
    body: Optional[Block] = None
    modifiers: Modifiers = frozenset()

    def children(self) -> list[Node]:
        return _present(self.body)


@dataclass(eq=False)
class MethodDeclaration(CallableDeclaration):
    return_type: str = "void"


@dataclass(eq=False)
class ConstructorDeclaration(CallableDeclaration):
    pass


@dataclass(eq=False)
class InitializerDeclaration(DocumentableNode):
    body: Block
    is_static: bool = False

    def children(self) -> list[Node]:
        return [self.body]


@dataclass(eq=False)
class EnumConstantDeclaration(DocumentableNode):
    """An enum constant; ``body`` holds the members of its class body, if any."""

    name: str
    arguments: list[Expression] = field(default_factory=list)
    body: Optional[list[Node]] = None

    def children(self) -> list[Node]:
        return [*self.arguments, *(self.body or [])]


@dataclass(eq=False)
class AnnotationMemberDeclaration(DocumentableNode):
    name: str
    type_name: str
    default_value: Optional[Expression] = None
    modifiers: Modifiers = frozenset()

    def children(self) -> list[Node]:
        return _present(self.default_value)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Block(Statement):
    """A braced block; local type declarations appear among its statements."""

    statements: list[Node] = field(default_factory=list)

    def children(self) -> list[Node]:
        return list(self.statements)


@dataclass(eq=False)
class EmptyStmt(Statement):
    pass


@dataclass(eq=False)
class ExpressionStmt(Statement):
    expression: Expression

    def children(self) -> list[Node]:
        return [self.expression]


@dataclass(eq=False)
class LocalVariableDeclaration(Statement):
    type_name: str
    variables: list[VariableDeclarator] = field(default_factory=list)

    def children(self) -> list[Node]:
        return list(self.variables)


@dataclass(eq=False)
class LabeledStmt(Statement):
    label: str
    statement: Statement

    def children(self) -> list[Node]:
        return [self.statement]


@dataclass(eq=False)
class IfStmt(Statement):
    condition: Expression
    then_statement: Statement
    else_statement: Optional[Statement] = None

    def children(self) -> list[Node]:
        return _present(self.condition, self.then_statement, self.else_statement)


@dataclass(eq=False)
class WhileStmt(Statement):
    condition: Expression
    body: Statement

    def children(self) -> list[Node]:
        return [self.condition, self.body]


@dataclass(eq=False)
class DoStmt(Statement):
    body: Statement
    condition: Expression

    def children(self) -> list[Node]:
        return [self.body, self.condition]


@dataclass(eq=False)
class ForStmt(Statement):
    """A classic for loop; ``init`` holds expressions or one local declaration."""

    body: Statement
    init: list[Node] = field(default_factory=list)
    condition: Optional[Expression] = None
    update: list[Expression] = field(default_factory=list)

    def children(self) -> list[Node]:
        return [*self.init, *_present(self.condition), *self.update, self.body]


@dataclass(eq=False)
class ForEachStmt(Statement):
    variable: Parameter
    iterable: Expression
    body: Statement

    def children(self) -> list[Node]:
        return [self.iterable, self.body]


@dataclass(eq=False)
class AssertStmt(Statement):
    check: Expression
    message: Optional[Expression] = None

    def children(self) -> list[Node]:
        return _present(self.check, self.message)


@dataclass(eq=False)
class BreakStmt(Statement):
    label: Optional[str] = None


@dataclass(eq=False)
class ContinueStmt(Statement):
    label: Optional[str] = None


@dataclass(eq=False)
class ReturnStmt(Statement):
    expression: Optional[Expression] = None

    def children(self) -> list[Node]:
        return _present(self.expression)


@dataclass(eq=False)
class YieldStmt(Statement):
    expression: Expression

    def children(self) -> list[Node]:
        return [self.expression]


@dataclass(eq=False)
class ThrowStmt(Statement):
    expression: Expression

    def children(self) -> list[Node]:
        return [self.expression]


@dataclass(eq=False)
class SynchronizedStmt(Statement):
    lock: Expression
    body: Block

    def children(self) -> list[Node]:
        return [self.lock, self.body]


@dataclass(eq=False)
class Resource(Node):
    """A try-with-resources entry: a declaration with an initializer or a
    reference to an existing variable."""

    name: str
    initializer: Optional[Expression] = None

    def children(self) -> list[Node]:
        return _present(self.initializer)


@dataclass(eq=False)
class CatchClause(Node):
    parameter: Parameter
    body: Block

    def children(self) -> list[Node]:
        return [self.body]


@dataclass(eq=False)
class TryStmt(Statement):
    try_block: Block
    resources: list[Resource] = field(default_factory=list)
    catch_clauses: list[CatchClause] = field(default_factory=list)
    finally_block: Optional[Block] = None

    def children(self) -> list[Node]:
        return [*self.resources, self.try_block, *self.catch_clauses, *_present(self.finally_block)]


@dataclass(eq=False)
class SwitchEntry(Node):
    """One case or default label with the statements that follow it.

    Consecutive labels of a statement group become separate entries; only
    the last one holds the statements.
    """

    labels: list[Expression] = field(default_factory=list)
    statements: list[Node] = field(default_factory=list)
    is_default: bool = False

    def children(self) -> list[Node]:
        return [*self.labels, *self.statements]


@dataclass(eq=False)
class SwitchStmt(Statement):
    selector: Expression
    entries: list[SwitchEntry] = field(default_factory=list)

    def children(self) -> list[Node]:
        return [self.selector, *self.entries]


@dataclass(eq=False)
class ExplicitConstructorInvocationStmt(Statement):
    """``this(...)`` or ``super(...)`` written in a constructor body.

    The parser only builds calls present in the source, so ``is_implicit`` is
    always false on parsed trees. It marks a synthesized ``super()`` in trees
    built by other means; such a call counts no statement.
    """

    is_this: bool = False
    arguments: list[Expression] = field(default_factory=list)
    is_implicit: bool = False

    def children(self) -> list[Node]:
        return list(self.arguments)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class OpaqueExpr(Expression):
    """Any expression; ``nested`` keeps the sub-expressions that hold code."""

    nested: list[Expression] = field(default_factory=list)

    def children(self) -> list[Node]:
        return list(self.nested)


@dataclass(eq=False)
class LambdaExpr(Expression):
    body: Union[Block, Expression]

    def children(self) -> list[Node]:
        return [self.body]


@dataclass(eq=False)
class ObjectCreationExpr(Expression):
    """``new T(...)``; ``body`` holds the members of an anonymous class."""

    type_name: str
    arguments: list[Expression] = field(default_factory=list)
    body: Optional[list[Node]] = None

    def children(self) -> list[Node]:
        return [*self.arguments, *(self.body or [])]


@dataclass(eq=False)
class SwitchExpr(Expression):
    selector: Expression
    entries: list[SwitchEntry] = field(default_factory=list)

    def children(self) -> list[Node]:
        return [self.selector, *self.entries]


MemberDeclaration = Union[
    FieldDeclaration,
    MethodDeclaration,
    ConstructorDeclaration,
    InitializerDeclaration,
    EnumConstantDeclaration,
    AnnotationMemberDeclaration,
    TypeDeclaration,
]
