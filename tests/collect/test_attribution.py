"""Tests for comment adjacency and the claimed-comment ledger."""

from javameter.collect import CommentLedger, JavaMetricsCollector, adjacent_comments, effective_start_line
from javameter.metrics import AggregatedMetrics, CommentMetrics
from javameter.syntax.nodes import (
    ClassDeclaration,
    Comment,
    CommentKind,
    CompilationUnit,
    FieldDeclaration,
    Range,
    VariableDeclarator,
)


def _line(line: int, column: int = 3) -> Comment:
    return Comment(CommentKind.LINE, " note", Range.of(line, column, line, column + 6))


def _field(begin: int, end: int = None, name: str = "x") -> FieldDeclaration:
    end = end if end is not None else begin
    declarator = VariableDeclarator(Range.of(begin, 7, end, 7 + len(name)), name)
    return FieldDeclaration(Range.of(begin, 3, end, 12), "int", variables=[declarator])


class TestEffectiveStartLine:
    """Test the start line used by the adjacency rule."""

    def test_without_comments(self):
        """Without comments the node's own first line is used."""
        assert effective_start_line(_field(5)) == 5

    def test_primary_comment_moves_start_up(self):
        """A comment placed before the node extends it upwards."""
        field = _field(5)
        field.comment = _line(4)
        assert effective_start_line(field) == 4

    def test_doc_comment_moves_start_up(self):
        """So does a doc comment."""
        field = _field(6)
        field.doc_comment = Comment(CommentKind.DOC, " d ", Range.of(3, 3, 5, 5))
        assert effective_start_line(field) == 3


class TestAdjacentComments:
    """Test which orphans belong to a node."""

    def test_chain_of_three_above_declaration(self):
        """Consecutive comments directly above are taken as a whole."""
        orphans = [_line(2), _line(3), _line(4)]
        assert adjacent_comments(_field(5), orphans) == [orphans[2], orphans[1], orphans[0]]

    def test_chain_above_primary_comment(self):
        """The chain continues above the node's own comment."""
        field = _field(5)
        field.comment = _line(4)
        orphans = [_line(2), _line(3)]
        assert adjacent_comments(field, orphans) == [orphans[1], orphans[0]]

    def test_blank_line_stops_chain(self):
        """A comment separated by a blank line stays with the parent."""
        orphans = [_line(2), _line(4)]
        assert adjacent_comments(_field(5), orphans) == [orphans[1]]

    def test_trailing_comment_on_same_line(self):
        """A comment on the node's last line belongs to the node."""
        trailing = Comment(CommentKind.LINE, " t", Range.of(5, 20, 5, 24))
        assert adjacent_comments(_field(5), [trailing]) == [trailing]

    def test_comment_inside_multi_line_node(self):
        """A comment within the node's lines belongs to the node."""
        inside = _line(6)
        assert adjacent_comments(_field(5, 7), [inside]) == [inside]

    def test_comments_below_are_skipped(self):
        """Orphans after the node are ignored without ending the scan."""
        below = _line(9)
        above = _line(4)
        assert adjacent_comments(_field(5), [above, below]) == [above]

    def test_distant_comment_not_adjacent(self):
        """A comment far above is not claimed."""
        assert adjacent_comments(_field(10), [_line(2)]) == []

    def test_multi_line_comment_in_chain(self):
        """A block comment ending right above continues the chain from its first line."""
        block = Comment(CommentKind.BLOCK, " b ", Range.of(2, 3, 4, 5))
        first = _line(1)
        assert adjacent_comments(_field(5), [first, block]) == [block, first]


class TestCommentLedger:
    """Test consume-once bookkeeping."""

    def test_claim_once(self):
        """A comment is counted by the first claimer only."""
        ledger = CommentLedger()
        comment = _line(1)
        first, second = CommentMetrics(), CommentMetrics()

        assert ledger.claim(comment, first)
        assert not ledger.claim(comment, second)
        assert first.line_comments == 1
        assert second.is_empty
        assert ledger.is_claimed(comment)
        assert len(ledger) == 1

    def test_equal_comments_are_distinct(self):
        """Two comments with the same text and position are still two comments."""
        ledger = CommentLedger()
        metrics = CommentMetrics()
        ledger.claim(_line(1), metrics)
        ledger.claim(_line(1), metrics)
        assert metrics.line_comments == 2

    def test_claimed_orphans_are_not_offered_again(self):
        """unclaimed_orphans() hides claimed comments without touching the tree."""
        field = _field(5)
        orphans = [_line(4), _line(8)]
        cls = ClassDeclaration(Range.of(1, 1, 10, 1), "A", members=[field], orphan_comments=list(orphans))
        ledger = CommentLedger()

        ledger.collect_adjacent_orphans(field, cls, CommentMetrics())

        assert ledger.unclaimed_orphans(cls) == [orphans[1]]
        assert cls.orphan_comments == orphans

    def test_collect_attached(self):
        """collect_attached() takes the primary and doc comment only."""
        field = _field(5)
        field.comment = _line(4)
        field.doc_comment = Comment(CommentKind.DOC, " d ", Range.of(3, 3, 3, 10))
        field.orphan_comments.append(_line(5, 20))
        metrics = CommentMetrics()

        CommentLedger().collect_attached(field, metrics)

        assert metrics.line_comments == 1
        assert metrics.doc_comments == 1

    def test_collect_subtree(self):
        """collect_subtree() sweeps every unclaimed comment below a node."""
        field = _field(5)
        field.variables[0].comment = _line(5, 20)
        cls = ClassDeclaration(Range.of(1, 1, 10, 1), "A", members=[field], orphan_comments=[_line(9)])
        metrics = CommentMetrics()

        CommentLedger().collect_subtree(cls, metrics)

        assert metrics.line_comments == 2


class TestNoDoubleCounting:
    """Every comment of a tree is counted exactly once."""

    def _unit(self) -> CompilationUnit:
        first = _field(4, name="a")
        second = _field(7, name="b")
        second.comment = _line(6)
        second.variables[0].orphan_comments.append(_line(7, 20))
        cls = ClassDeclaration(
            Range.of(2, 1, 10, 1),
            "A",
            members=[first, second],
            orphan_comments=[_line(3), _line(5), _line(9)],
        )
        cls.comment = _line(1)
        return CompilationUnit(Range.of(1, 1, 10, 1), types=[cls])

    def test_every_comment_counted_once(self):
        """The totals hold each of the tree's comments once."""
        unit = self._unit()
        expected = sum(len(node.own_comments()) for node in unit.walk())

        collector = JavaMetricsCollector()
        collector.collect_unit("A.java", unit)

        assert AggregatedMetrics.of(collector.metrics).comments == expected == 6

    def test_adjacent_orphans_go_to_fields(self):
        """Orphans above a field are claimed by it, the rest stay on the class."""
        collector = JavaMetricsCollector()
        collector.collect_unit("A.java", self._unit())
        type_metrics = collector.metrics.packages[0].compilation_units[0].types[0]

        assert [f.comments.line_comments for f in type_metrics.fields] == [1, 3]
        # The class keeps its own comment and the orphan on line 9.
        assert type_metrics.comments.line_comments == 2

    def test_tree_is_not_modified(self):
        """Collecting leaves every comment slot as it was."""
        unit = self._unit()
        before = [(id(n), list(n.orphan_comments), n.comment) for n in unit.walk()]

        JavaMetricsCollector().collect_unit("A.java", unit)

        after = [(id(n), list(n.orphan_comments), n.comment) for n in unit.walk()]
        assert before == after
