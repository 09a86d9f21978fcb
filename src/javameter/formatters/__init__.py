"""Report formatters for javameter."""

from .base import BaseFormatter, ReportMetadata
from .json_formatter import JsonFormatter
from .text_formatter import TextFormatter
from .xml_formatter import XmlFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "text", "json", "xml"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "text": TextFormatter,
        "json": JsonFormatter,
        "xml": XmlFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "ReportMetadata",
    "TextFormatter",
    "JsonFormatter",
    "XmlFormatter",
    "get_formatter",
]
