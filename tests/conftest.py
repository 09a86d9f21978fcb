"""Shared test fixtures for javameter tests."""

from textwrap import dedent

import pytest

from javameter.collect import JavaMetricsCollector
from javameter.syntax import JavaLanguageLevel, JavaSourceParser


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def parse():
    """Parse Java source (dedented) into a syntax tree."""

    def _parse(source, level=JavaLanguageLevel.JAVA_21, preview=False, name="Test.java"):
        return JavaSourceParser(level, preview).parse(name, dedent(source))

    return _parse


@pytest.fixture
def collect():
    """Collect metrics from one or more sources; returns the root metrics.

    Accepts a single source string or a mapping of unit name to source.
    """

    def _collect(sources, level=JavaLanguageLevel.JAVA_21, preview=False):
        if isinstance(sources, str):
            sources = {"Test.java": sources}
        collector = JavaMetricsCollector(level, preview)
        for name, source in sources.items():
            collector.collect(name, dedent(source))
        return collector.metrics

    return _collect


@pytest.fixture
def collect_type(collect):
    """Collect one unit and return the metrics of its first top-level type."""

    def _collect_type(source, **kwargs):
        metrics = collect(source, **kwargs)
        return metrics.packages[0].compilation_units[0].types[0]

    return _collect_type
