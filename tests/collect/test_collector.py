"""Tests for JavaMetricsCollector on parsed sources."""

from textwrap import dedent

import pytest

from javameter.collect import JavaMetricsCollector
from javameter.exceptions import CollectionError, ParsingError
from javameter.metrics import AggregatedMetrics, FieldKind, MethodKind, TypeKind
from javameter.syntax import JavaLanguageLevel
from javameter.syntax.nodes import ClassDeclaration, CompilationUnit, PackageDeclaration, Range, ReturnStmt

R = Range.of(1, 1, 1, 10)


def _line_comments(elements):
    return [element.comments.line_comments for element in elements]


class TestFields:
    """Test per-declarator field metrics."""

    def test_one_metrics_per_declarator(self, collect_type):
        """int a, b = 1, c = 2; gives three fields."""
        type_metrics = collect_type(
            """
            class X {
                // about the fields
                int a, b = 1, c = 2;
            }
            """
        )
        assert [f.name for f in type_metrics.fields] == ["a", "b", "c"]
        assert [f.kind for f in type_metrics.fields] == [FieldKind.INSTANCE_FIELD] * 3
        assert [f.statements.statements for f in type_metrics.fields] == [0, 1, 1]

    def test_declaration_comment_goes_to_first_declarator(self, collect_type):
        """The comment above a multi-declarator field is counted once."""
        type_metrics = collect_type(
            """
            class X {
                // about the fields
                int a, b = 1, c = 2;
            }
            """
        )
        assert _line_comments(type_metrics.fields) == [1, 0, 0]
        assert type_metrics.comments.is_empty

    def test_trailing_comment(self, collect_type):
        """A comment after a field on the same line belongs to the field."""
        type_metrics = collect_type(
            """
            class X {
                static final int LIMIT = 10; // upper bound
            }
            """
        )
        field = type_metrics.fields[0]
        assert field.kind is FieldKind.STATIC_FIELD
        assert field.comments.line_comments == 1
        assert field.comments.line_comments_length == len("upper bound")


class TestCommentAttribution:
    """Test which element a parsed comment is counted for."""

    def test_chain_of_three_comments(self, collect_type):
        """Three line comments directly above a method all belong to it."""
        type_metrics = collect_type(
            """
            class X {
                void first() {}

                // one
                // two
                // three
                void second() {}
            }
            """
        )
        assert _line_comments(type_metrics.methods) == [0, 3]
        assert type_metrics.comments.is_empty

    def test_blank_line_keeps_comment_on_type(self, collect_type):
        """A comment separated from the next member stays with the type."""
        type_metrics = collect_type(
            """
            class X {
                // about X

                int a;
            }
            """
        )
        assert type_metrics.comments.line_comments == 1
        assert _line_comments(type_metrics.fields) == [0]

    def test_doc_comment(self, collect_type):
        """Doc comments are counted separately with their line span."""
        type_metrics = collect_type(
            """
            class X {
                /**
                 * Returns the size.
                 */
                int size() { return 0; }
            }
            """
        )
        comments = type_metrics.methods[0].comments
        assert comments.doc_comments == 1
        assert comments.doc_comment_lines == 3
        assert comments.doc_comments_length == len("Returns the size.")

    def test_comments_inside_method_body(self, collect_type):
        """Comments anywhere in a body belong to the method."""
        type_metrics = collect_type(
            """
            class X {
                int m(int a) {
                    // first
                    int b = a; /* second */
                    return b; // third
                }
            }
            """
        )
        comments = type_metrics.methods[0].comments
        assert comments.line_comments == 2
        assert comments.block_comments == 1

    def test_class_doc_comment(self, collect_type):
        """The doc comment of a type is counted for the type."""
        type_metrics = collect_type(
            """
            /** A point. */
            class Point {
            }
            """
        )
        assert type_metrics.comments.doc_comments == 1

    def test_every_comment_counted_once(self, collect, parse):
        """The totals hold each comment of the source exactly once."""
        source = """
            /* header */
            package p;

            import java.util.List; // trailing import

            /** Doc. */
            public class Sample {
                int a = 1; // trailing field

                void run(List<String> items) {
                    // inside
                    items.forEach(item -> {
                        /* lambda */
                        System.out.println(item);
                    });
                    Runnable r = new Runnable() {
                        // anonymous
                        public void run() {}
                    };
                }
                // dangling
            }
            // end
            """
        unit = parse(source)
        placed = sum(len(node.own_comments()) for node in unit.walk())

        metrics = collect(source)
        sample = metrics.packages[0].compilation_units[0].types[0]

        assert placed == 9
        assert AggregatedMetrics.of(metrics).comments == 9
        assert sample.comments.doc_comments == 1
        assert sample.fields[0].comments.line_comments == 1


class TestPackages:
    """Test package grouping and package documentation."""

    def test_units_grouped_by_package(self, collect):
        """Units declaring the same package share one PackageMetrics."""
        metrics = collect(
            {
                "A.java": "package a; class A {}",
                "B.java": "package b; class B {}",
                "C.java": "package a; class C {}",
                "D.java": "class D {}",
            }
        )
        assert [p.name for p in metrics] == ["a", "b", ""]
        assert [u.name for u in metrics.packages[0].compilation_units] == ["A.java", "C.java"]

    def test_package_info_comments_go_to_package(self, collect):
        """A unit with no types documents its package."""
        metrics = collect(
            {
                "package-info.java": """
                    /** Utilities. */
                    package org.example.util;
                    """,
            }
        )
        package = metrics.packages[0]
        assert package.name == "org.example.util"
        assert package.comments.doc_comments == 1
        assert package.compilation_units[0].comments.is_empty
        assert package.compilation_units[0].types == []

    def test_package_comment_with_types_goes_to_unit(self, collect):
        """With types present the package declaration's comment is the unit's."""
        metrics = collect(
            """
            // Copyright
            package org.example;

            class A {}
            """
        )
        package = metrics.packages[0]
        assert package.comments.is_empty
        assert package.compilation_units[0].comments.line_comments == 1


class TestModules:
    """Test module declarations."""

    SOURCE = """
        /** The app. */
        open module com.example.app {
            requires java.base;
            requires transitive java.sql;
            exports com.example.api;
            opens com.example.internal;
            uses com.example.Service;
            provides com.example.Service with com.example.Impl;
        }
        """

    def test_directive_counts(self, collect):
        """Each directive kind is counted."""
        metrics = collect({"module-info.java": self.SOURCE})
        modular = metrics.modular_compilation_units[0]
        module = modular.module

        assert modular.name == "module-info.java"
        assert module.name == "com.example.app"
        assert module.is_open
        assert (module.requires, module.exports, module.opens, module.uses, module.provides) == (2, 1, 1, 1, 1)
        assert metrics.packages == []

    def test_module_comment(self, collect):
        """The comment above the module declaration is the module's."""
        metrics = collect({"module-info.java": self.SOURCE})
        assert metrics.modular_compilation_units[0].module.comments.doc_comments == 1


class TestTypes:
    """Test nested, local and anonymous types and the special type kinds."""

    def test_local_and_anonymous_types(self, collect_type):
        """Types declared in a body are local types of the method."""
        type_metrics = collect_type(
            """
            class Outer {
                void run() {
                    class Local { void go() { step(); } }
                    Runnable r = new Runnable() {
                        public void run() { step(); }
                    };
                    r.run();
                }
                java.util.Comparator<String> byLength = new java.util.Comparator<String>() {
                    public int compare(String a, String b) { return a.length() - b.length(); }
                };
            }
            """
        )
        method = type_metrics.methods[0]
        assert method.statements.statements == 2
        assert [(t.name, t.kind) for t in method.local_types] == [
            ("Local", TypeKind.CLASS),
            ("Anonymous$Runnable", TypeKind.ANONYMOUS_CLASS),
        ]
        assert method.local_types[0].methods[0].statements.statements == 1

        assert type_metrics.fields[0].statements.statements == 1
        anonymous = type_metrics.inner_types[0]
        assert anonymous.name == "Anonymous$Comparator"
        assert [(m.name, m.statements.statements) for m in anonymous.methods] == [
            ("int compare(String, String)", 1)
        ]

    def test_nested_types(self, collect_type):
        """Member types are inner types."""
        type_metrics = collect_type(
            """
            class Outer {
                interface Callback { void done(); }
                static class Node {}
            }
            """
        )
        assert [(t.name, t.kind) for t in type_metrics.inner_types] == [
            ("Callback", TypeKind.INTERFACE),
            ("Node", TypeKind.CLASS),
        ]

    def test_enum(self, collect_type):
        """Constants with a body are types, the others are fields."""
        type_metrics = collect_type(
            """
            enum Op {
                PLUS("+") {
                    int apply(int a, int b) { return a + b; }
                },
                NEG("-");

                private final String symbol;

                Op(String symbol) { this.symbol = symbol; }

                int apply(int a, int b) { throw new UnsupportedOperationException(); }
            }
            """
        )
        assert type_metrics.kind is TypeKind.ENUM
        assert [(f.name, f.kind) for f in type_metrics.fields] == [
            ("NEG", FieldKind.ENUM_CONSTANT),
            ("symbol", FieldKind.INSTANCE_FIELD),
        ]
        assert [(m.name, m.kind) for m in type_metrics.methods] == [
            ("Op(String)", MethodKind.CONSTRUCTOR),
            ("int apply(int, int)", MethodKind.INSTANCE_METHOD),
        ]
        plus = type_metrics.inner_types[0]
        assert (plus.name, plus.kind) == ("PLUS", TypeKind.ENUM_CONSTANT)
        assert plus.methods[0].statements.statements == 1

    def test_annotation_elements(self, collect_type):
        """Annotation elements are fields; a default value counts once."""
        type_metrics = collect_type(
            """
            @interface Retry {
                int times() default 3;
                String reason();
            }
            """
        )
        assert type_metrics.kind is TypeKind.ANNOTATION
        assert [(f.name, f.kind, f.statements.statements) for f in type_metrics.fields] == [
            ("times", FieldKind.ANNOTATION_TYPE_ELEMENT, 1),
            ("reason", FieldKind.ANNOTATION_TYPE_ELEMENT, 0),
        ]

    def test_record(self, collect_type):
        """Components are not fields; a compact constructor takes them as parameters."""
        type_metrics = collect_type(
            """
            record Point(int x, int y) {
                Point {
                    if (x < 0) throw new IllegalArgumentException();
                }
                static Point origin() { return new Point(0, 0); }
            }
            """
        )
        assert type_metrics.kind is TypeKind.RECORD
        assert type_metrics.fields == []
        assert [(m.name, m.kind, m.statements.statements) for m in type_metrics.methods] == [
            ("Point(int, int)", MethodKind.CONSTRUCTOR, 2),
            ("Point origin()", MethodKind.STATIC_METHOD, 1),
        ]


class TestCollector:
    """Test the collector's bookkeeping and failure behaviour."""

    def test_counts_units_and_packages(self):
        collector = JavaMetricsCollector()
        collector.collect("A.java", "package a; class A {}")
        collector.collect("module-info.java", "module m {}")

        assert collector.num_units == 2
        assert collector.collected_packages == ["a"]
        assert collector.num_collected_packages == 1

    def test_empty_name_rejected(self):
        with pytest.raises(CollectionError):
            JavaMetricsCollector().collect("", "class A {}")

    def test_parse_failure_leaves_metrics_untouched(self):
        """A unit that does not parse adds nothing."""
        collector = JavaMetricsCollector()
        collector.collect("A.java", "class A {}")

        with pytest.raises(ParsingError):
            collector.collect("B.java", "class B {")

        assert collector.num_units == 1
        assert [u.name for u in collector.metrics.packages[0].compilation_units] == ["A.java"]

    def test_collection_failure_is_atomic(self):
        """A unit that fails halfway leaves no package or partial unit behind."""
        good = ClassDeclaration(R, "Good")
        bad = ClassDeclaration(R, "Bad", members=[ReturnStmt(R)])
        unit = CompilationUnit(R, package=PackageDeclaration(R, "p"), types=[good, bad])
        collector = JavaMetricsCollector()

        with pytest.raises(CollectionError):
            collector.collect_unit("Bad.java", unit)

        assert collector.metrics.is_empty
        assert collector.num_units == 0

    def test_language_level_is_enforced(self):
        """Sources newer than the configured level are rejected."""
        collector = JavaMetricsCollector(JavaLanguageLevel.JAVA_11)
        with pytest.raises(ParsingError, match="records are not supported in Java 11"):
            collector.collect("P.java", "record P(int x) {}")

    def test_reused_collector_accumulates(self):
        """Collecting more units adds to the same tree."""
        collector = JavaMetricsCollector()
        for name in ("A", "B", "C"):
            collector.collect(f"{name}.java", dedent(f"class {name} {{ void m() {{ run(); }} }}"))

        totals = AggregatedMetrics.of(collector.metrics)
        assert totals.compilation_units == 3
        assert totals.methods == 3
        assert totals.statements == 3


@pytest.mark.slow
class TestLargeSources:
    """Collect sources far bigger than the usual test snippets."""

    def test_many_members_and_deep_nesting(self):
        nested = "if (x > 0) { " * 40 + "x--;" + " }" * 40
        methods = "\n".join(f"    int m{i}(int x) {{ {nested} return x; }}" for i in range(500))
        source = f"class Big {{\n{methods}\n}}\n"

        collector = JavaMetricsCollector()
        collector.collect("Big.java", source)

        totals = AggregatedMetrics.of(collector.metrics)
        assert totals.methods == 500
        # 40 ifs, the decrement and the return in every method
        assert totals.statements == 500 * 42
