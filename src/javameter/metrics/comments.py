"""Comment counters."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

from ..syntax.nodes import Comment, CommentKind

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def content_length(comment: Comment) -> int:
    """Characters of a comment's text, ignoring layout.

    Each line is stripped of surrounding whitespace; block and doc comment
    lines are also stripped of the asterisks that frame them.
    """
    total = 0
    for line in _LINE_BREAK.split(comment.content):
        line = line.strip()
        if comment.kind is not CommentKind.LINE:
            line = line.strip("*").strip()
        total += len(line)
    return total


@dataclass
class CommentMetrics:
    """Counts, line spans and content lengths of line, block and doc comments."""

    line_comments: int = 0
    line_comments_length: int = 0
    block_comments: int = 0
    block_comment_lines: int = 0
    block_comments_length: int = 0
    doc_comments: int = 0
    doc_comment_lines: int = 0
    doc_comments_length: int = 0

    def add_comment(self, comment: Comment) -> None:
        length = content_length(comment)
        match comment.kind:
            case CommentKind.LINE:
                self.line_comments += 1
                self.line_comments_length += length
            case CommentKind.BLOCK:
                self.block_comments += 1
                self.block_comment_lines += comment.end_line - comment.begin_line + 1
                self.block_comments_length += length
            case CommentKind.DOC:
                self.doc_comments += 1
                self.doc_comment_lines += comment.end_line - comment.begin_line + 1
                self.doc_comments_length += length

    def add(self, other: CommentMetrics) -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))

    @property
    def total_comments(self) -> int:
        return self.line_comments + self.block_comments + self.doc_comments

    @property
    def is_empty(self) -> bool:
        return self.total_comments == 0
