"""Comment attribution: which comments belong to which metrics node.

The syntax tree is never modified. A ``CommentLedger`` remembers every
comment already added to some metrics node, so a comment reachable from
several places in the tree is still counted exactly once: by whichever
node claims it first.

Drivers follow the same order for every declaration:
    1. claim the orphan comments of the parent that are adjacent to the
       declaration (``collect_adjacent_orphans``)
    2. process the children
    3. collect the declaration's own remaining comments (``collect_own``)
"""

from __future__ import annotations

from typing import Iterable

from ..metrics import CommentMetrics
from ..syntax.nodes import Comment, DocumentableNode, Node


def effective_start_line(node: Node) -> int:
    """First line of a node including the comments placed in front of it."""
    lines = [node.begin_line]
    if node.comment is not None:
        lines.append(node.comment.begin_line)
    if isinstance(node, DocumentableNode) and node.doc_comment is not None:
        lines.append(node.doc_comment.begin_line)
    return min(lines)


def adjacent_comments(node: Node, orphans: Iterable[Comment]) -> list[Comment]:
    """The orphans that belong to ``node`` rather than to the node holding them.

    Scans from the bottom up. Orphans below the node are skipped. An orphan
    is adjacent when it starts within the node's lines (same line or
    trailing), or when it ends on the first line of the node or the line
    before. In the latter case the boundary moves up to the orphan's first
    line, so a chain of comments directly above a declaration is taken as a
    whole. The scan stops at the first orphan that is not adjacent.
    """
    start = effective_start_line(node)
    end = node.end_line
    boundary = start

    adjacent = []
    for orphan in sorted(orphans, key=lambda c: c.range.begin, reverse=True):
        if orphan.begin_line > end:
            continue
        if orphan.begin_line >= start:
            adjacent.append(orphan)
        elif boundary - 1 <= orphan.end_line <= boundary:
            adjacent.append(orphan)
            boundary = orphan.begin_line
        else:
            break
    return adjacent


class CommentLedger:
    """Comments claimed so far while collecting one compilation unit."""

    def __init__(self) -> None:
        self._claimed: set[Comment] = set()

    def __len__(self) -> int:
        return len(self._claimed)

    def is_claimed(self, comment: Comment) -> bool:
        return comment in self._claimed

    def claim(self, comment: Comment, into: CommentMetrics) -> bool:
        """Add ``comment`` to ``into`` unless it was claimed before."""
        if comment in self._claimed:
            return False
        self._claimed.add(comment)
        into.add_comment(comment)
        return True

    def unclaimed_orphans(self, node: Node) -> list[Comment]:
        return [c for c in node.orphan_comments if c not in self._claimed]

    def collect_adjacent_orphans(self, node: Node, parent: Node, into: CommentMetrics) -> None:
        """Claim the parent's orphans that are adjacent to ``node``."""
        for comment in adjacent_comments(node, self.unclaimed_orphans(parent)):
            self.claim(comment, into)

    def collect_attached(self, node: Node, into: CommentMetrics) -> None:
        """Claim the comment and doc comment placed in front of ``node``."""
        if node.comment is not None:
            self.claim(node.comment, into)
        if isinstance(node, DocumentableNode) and node.doc_comment is not None:
            self.claim(node.doc_comment, into)

    def collect_own(self, node: Node, into: CommentMetrics) -> None:
        """Claim every comment the node holds directly."""
        for comment in node.own_comments():
            self.claim(comment, into)

    def collect_subtree(self, node: Node, into: CommentMetrics) -> None:
        """Claim every comment still unclaimed in the node's subtree."""
        for descendant in node.walk():
            self.collect_own(descendant, into)
