"""Tests for statement counting."""

import pytest

from javameter.collect import statement_count
from javameter.exceptions import UnclassifiedNodeError
from javameter.syntax.nodes import (
    Block,
    BreakStmt,
    EmptyStmt,
    ExplicitConstructorInvocationStmt,
    ExpressionStmt,
    LabeledStmt,
    LocalVariableDeclaration,
    OpaqueExpr,
    Range,
    Resource,
    ReturnStmt,
    TryStmt,
    VariableDeclarator,
    YieldStmt,
)

R = Range.of(1, 1, 1, 10)


def _expr() -> OpaqueExpr:
    return OpaqueExpr(R)


def _method_statements(type_metrics, index=0):
    return type_metrics.methods[index].statements.statements


class TestStatementTable:
    """Test the per-node rule table on hand-built nodes."""

    def test_simple_statements_count_one(self):
        """Return, break and expression statements count once."""
        assert statement_count(ReturnStmt(R)) == 1
        assert statement_count(BreakStmt(R)) == 1
        assert statement_count(ExpressionStmt(R, _expr())) == 1

    def test_wrappers_count_zero(self):
        """Blocks, empty statements and labels are transparent."""
        assert statement_count(Block(R)) == 0
        assert statement_count(EmptyStmt(R)) == 0
        assert statement_count(LabeledStmt(R, "outer", ReturnStmt(R))) == 0

    def test_yield_counts_zero(self):
        """yield only hands a value to the enclosing switch expression."""
        assert statement_count(YieldStmt(R, _expr())) == 0

    def test_implicit_constructor_call_counts_zero(self):
        """Only explicitly written this()/super() calls count."""
        assert statement_count(ExplicitConstructorInvocationStmt(R)) == 1
        assert statement_count(ExplicitConstructorInvocationStmt(R, is_implicit=True)) == 0

    def test_try_with_resources(self):
        """A try counts once plus once per initialized resource."""
        resources = [
            Resource(R, "in", initializer=_expr()),
            Resource(R, "existing"),
            Resource(R, "out", initializer=_expr()),
        ]
        assert statement_count(TryStmt(R, Block(R), resources=resources)) == 3

    def test_local_variables_count_initialized_declarators(self):
        """Only declarators with an initializer count."""
        declaration = LocalVariableDeclaration(
            R,
            "int",
            [
                VariableDeclarator(R, "a"),
                VariableDeclarator(R, "b", _expr()),
                VariableDeclarator(R, "c", _expr()),
            ],
        )
        assert statement_count(declaration) == 2

    def test_unknown_node_raises(self):
        """Anything outside the table is a logic error."""
        with pytest.raises(UnclassifiedNodeError, match="Cannot classify OpaqueExpr"):
            statement_count(_expr())


class TestMethodStatements:
    """Test statement counts collected from parsed methods."""

    def test_switch_with_case_and_default(self, collect_type):
        """switch + labels + the statements after them."""
        type_metrics = collect_type(
            """
            class X {
                void m(int x) {
                    switch (x) {
                        case 1:
                            System.out.println("one");
                            break;
                        default:
                            System.out.println("other");
                    }
                }
            }
            """
        )
        assert _method_statements(type_metrics) == 6

    def test_grouped_labels_count_separately(self, collect_type):
        """Each case label of a group is one statement."""
        type_metrics = collect_type(
            """
            class X {
                void m(int x) {
                    switch (x) {
                        case 1:
                        case 2:
                            run();
                    }
                }
            }
            """
        )
        # switch, two labels, one call
        assert _method_statements(type_metrics) == 4

    def test_switch_rules(self, collect_type):
        """Each arrow rule is one entry, however many constants it lists."""
        type_metrics = collect_type(
            """
            class X {
                void m(int x) {
                    switch (x) {
                        case 1 -> run();
                        case 2, 3 -> { run(); stop(); }
                        default -> throw new IllegalStateException();
                    }
                }
            }
            """
        )
        # switch 1, entries 3, run 1, run + stop 2, throw 1
        assert _method_statements(type_metrics) == 8

    def test_empty_block_empty_statement_and_label(self, collect_type):
        """Wrappers add nothing; the labeled loop still counts."""
        type_metrics = collect_type(
            """
            class X {
                void m() {
                    {}
                    ;
                    outer:
                    while (true) {
                        break outer;
                    }
                }
            }
            """
        )
        # while and break
        assert _method_statements(type_metrics) == 2

    def test_control_flow(self, collect_type):
        """if/else, loops and try/catch/finally count once each."""
        type_metrics = collect_type(
            """
            class X {
                int m(int[] values) {
                    int total = 0;
                    for (int i = 0; i < values.length; i++) {
                        if (values[i] > 0) {
                            total += values[i];
                        } else {
                            continue;
                        }
                    }
                    for (int v : values) assert v != 0 : "zero";
                    do { total--; } while (total > 100);
                    try {
                        synchronized (this) { notify(); }
                    } catch (RuntimeException e) {
                        throw e;
                    } finally {
                        total++;
                    }
                    return total;
                }
            }
            """
        )
        # total=0 1, for 1 + init 1, if 1, += 1, continue 1, foreach 1, assert 1,
        # do 1, total-- 1, try 1, synchronized 1, notify 1, throw 1, total++ 1, return 1
        assert _method_statements(type_metrics) == 16

    def test_try_with_resources_parsed(self, collect_type):
        """Declared resources count, referenced ones do not."""
        type_metrics = collect_type(
            """
            class X {
                void m(java.io.InputStream existing) throws Exception {
                    try (var in = open(); existing) {
                        in.read();
                    }
                }
            }
            """
        )
        # try 1, resource 1, read 1
        assert _method_statements(type_metrics) == 3

    def test_explicit_constructor_call(self, collect_type):
        """this(...) in a constructor counts."""
        type_metrics = collect_type(
            """
            class X {
                X() {
                    this(1);
                }
                X(int v) {
                    super();
                    value = v;
                }
                int value;
            }
            """
        )
        assert [m.statements.statements for m in type_metrics.methods] == [1, 2]

    def test_lambda_body_counts_for_method(self, collect_type):
        """Statements inside a lambda belong to the enclosing method."""
        type_metrics = collect_type(
            """
            class X {
                Runnable m() {
                    return () -> {
                        first();
                        second();
                    };
                }
            }
            """
        )
        assert _method_statements(type_metrics) == 3

    def test_switch_expression_counts_entries(self, collect_type):
        """A switch expression is not a statement; its entries are."""
        type_metrics = collect_type(
            """
            class X {
                String m(int x) {
                    return switch (x) {
                        case 1 -> "one";
                        default -> {
                            yield "other";
                        }
                    };
                }
            }
            """
        )
        # return 1, two entries 2, "one" expression statement 1, yield 0
        assert _method_statements(type_metrics) == 4

    def test_field_initializer_counts_one(self, collect_type):
        """An initialized field counts one statement."""
        type_metrics = collect_type(
            """
            class X {
                int a;
                int b = 1;
            }
            """
        )
        assert [f.statements.statements for f in type_metrics.fields] == [0, 1]

    def test_lambda_initializer_counts_one(self, collect_type):
        """Statements inside an initializer are part of its single statement."""
        type_metrics = collect_type(
            """
            class X {
                Runnable a = () -> { /* run */ f(); g(); }, b;
            }
            """
        )
        assert [f.statements.statements for f in type_metrics.fields] == [1, 0]
        # Comments inside the initializer still belong to the field.
        assert type_metrics.fields[0].comments.block_comments == 1

    def test_enum_constant_arguments_count_nothing(self, collect_type):
        """An enum constant has no initializer, whatever its arguments hold."""
        type_metrics = collect_type(
            """
            enum E {
                A(() -> { f(); });
                E(Runnable r) {}
            }
            """
        )
        assert [(f.name, f.statements.statements) for f in type_metrics.fields] == [("A", 0)]

    def test_abstract_method_has_no_statements(self, collect_type):
        """A method without a body counts nothing."""
        type_metrics = collect_type(
            """
            abstract class X {
                abstract void m();
            }
            """
        )
        assert _method_statements(type_metrics) == 0
