"""Placement of source comments into the syntax tree's comment slots.

Placement works top-down. At each node the comments inside it are split
between the children that contain them and the node itself. The ones left
at the node are then placed as follows:

1. a line comment that starts on the line a child ends on, after the child,
   becomes that child's comment
2. the last comment before a child, with no blank line in between, becomes
   the child's comment (or its doc comment for ``/** */`` comments on
   documentable declarations)
3. everything else stays on the node as an orphan

Every comment ends up in exactly one slot.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .nodes import Comment, CommentKind, DocumentableNode, Node


def place_comments(root: Node, comments: Iterable[Comment]) -> None:
    """Distribute ``comments`` over ``root`` and its descendants."""
    _place(root, sorted(comments, key=lambda c: c.range.begin))


def _place(node: Node, comments: list[Comment]) -> None:
    children = sorted(node.children(), key=lambda n: n.range.begin)

    delegated: dict[int, list[Comment]] = {id(child): [] for child in children}
    remaining: list[Comment] = []
    for comment in comments:
        owner = _containing_child(children, comment)
        if owner is None:
            remaining.append(comment)
        else:
            delegated[id(owner)].append(comment)

    for child in children:
        _place(child, delegated[id(child)])

    remaining = _place_trailing_line_comments(remaining, children)
    remaining = _place_preceding_comments(remaining, children)
    node.orphan_comments.extend(remaining)


def _containing_child(children: list[Node], comment: Comment) -> Optional[Node]:
    for child in children:
        if child.range.contains(comment.range):
            return child
    return None


def _place_trailing_line_comments(comments: list[Comment], children: list[Node]) -> list[Comment]:
    unplaced = []
    for comment in comments:
        target = None
        if comment.kind is CommentKind.LINE:
            for child in children:
                if child.end_line == comment.begin_line and child.range.end <= comment.range.begin:
                    target = child
        if target is not None and target.comment is None:
            target.comment = comment
        else:
            unplaced.append(comment)
    return unplaced


def _place_preceding_comments(comments: list[Comment], children: list[Node]) -> list[Comment]:
    unplaced = list(comments)
    events: list[tuple[object, int, object]] = [(c.range.begin, 0, c) for c in comments]
    events.extend((child.range.begin, 1, child) for child in children)
    events.sort(key=lambda e: (e[0], e[1]))

    previous: Optional[Comment] = None
    for _, is_child, item in events:
        if not is_child:
            previous = item  # type: ignore[assignment]
            continue
        if previous is not None and _attach_preceding(item, previous):  # type: ignore[arg-type]
            unplaced.remove(previous)
        previous = None
    return unplaced


def _attach_preceding(child: Node, comment: Comment) -> bool:
    # A blank line between a comment and the next node separates them.
    if child.begin_line - comment.end_line > 1:
        return False
    if (
        comment.kind is CommentKind.DOC
        and isinstance(child, DocumentableNode)
        and child.doc_comment is None
    ):
        child.doc_comment = comment
        return True
    if child.comment is None:
        child.comment = comment
        return True
    return False
