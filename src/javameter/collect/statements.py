"""Statement counting.

``statement_count`` is the rule table: how many statements a single syntax
node contributes on its own, not counting its children. ``StatementWalker``
applies it to a whole body, hands the types declared inside the body to a
callback, and claims the comments of every node it visits.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..exceptions import UnclassifiedNodeError
from ..metrics import CommentMetrics, StatementMetrics
from ..syntax.nodes import (
    AssertStmt,
    Block,
    BreakStmt,
    CatchClause,
    ContinueStmt,
    DoStmt,
    EmptyStmt,
    ExplicitConstructorInvocationStmt,
    Expression,
    ExpressionStmt,
    ForEachStmt,
    ForStmt,
    IfStmt,
    LabeledStmt,
    LocalVariableDeclaration,
    Node,
    ObjectCreationExpr,
    Resource,
    ReturnStmt,
    Statement,
    SwitchEntry,
    SwitchStmt,
    SynchronizedStmt,
    ThrowStmt,
    TryStmt,
    TypeDeclaration,
    VariableDeclarator,
    WhileStmt,
    YieldStmt,
)
from .attribution import CommentLedger

# Called with a type declaration (or anonymous class creation) and the node holding it.
TypeHandler = Callable[[Node, Node], None]


def statement_count(node: Node) -> int:
    """Statements contributed by ``node`` itself.

    Raises:
        UnclassifiedNodeError: If ``node`` is not a statement variant
    """
    match node:
        case ExplicitConstructorInvocationStmt(is_implicit=True):
            return 0
        case (
            AssertStmt()
            | BreakStmt()
            | ContinueStmt()
            | DoStmt()
            | ExplicitConstructorInvocationStmt()
            | ExpressionStmt()
            | ForStmt()
            | ForEachStmt()
            | IfStmt()
            | ReturnStmt()
            | SwitchStmt()
            | SynchronizedStmt()
            | ThrowStmt()
            | WhileStmt()
        ):
            return 1
        case SwitchEntry():
            # One per case or default label.
            return 1
        case TryStmt(resources=resources):
            return 1 + sum(1 for r in resources if r.initializer is not None)
        case LocalVariableDeclaration(variables=variables):
            return sum(1 for v in variables if v.initializer is not None)
        case Block() | EmptyStmt() | LabeledStmt() | YieldStmt():
            return 0
        case _:
            raise UnclassifiedNodeError(node, "statement")


class StatementWalker:
    """Counts the statements below a node and claims their comments.

    Args:
        ledger: Claimed comments of the current compilation unit
        statements: Receives the count; None when the code being walked has
            no element to count statements for
        comments: Receives the comments of every visited node
        on_type: Called for local and anonymous classes, which are collected
            as types of their own and not walked any further
    """

    def __init__(
        self,
        ledger: CommentLedger,
        statements: Optional[StatementMetrics],
        comments: CommentMetrics,
        on_type: TypeHandler,
    ) -> None:
        self._ledger = ledger
        self._statements = statements
        self._comments = comments
        self._on_type = on_type

    def walk(self, node: Node, parent: Node) -> None:
        match node:
            case TypeDeclaration():
                self._on_type(node, parent)
                return
            case ObjectCreationExpr(body=body) if body is not None:
                for argument in node.arguments:
                    self.walk(argument, node)
                self._on_type(node, parent)
                return
            case Statement() | SwitchEntry():
                self._count(statement_count(node))
            case Expression() | VariableDeclarator() | Resource() | CatchClause():
                # Switch expressions count through their entries only.
                pass
            case _:
                raise UnclassifiedNodeError(node, "code element")

        for child in node.children():
            self.walk(child, node)
        self._ledger.collect_own(node, self._comments)

    def _count(self, count: int) -> None:
        if self._statements is not None:
            self._statements.add(count)
