"""Exception hierarchy for javameter."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
    UnsupportedLanguageLevelError,
)
from .base import JavameterError
from .collection import CollectionError, UnclassifiedNodeError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "JavameterError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageLevelError",
    "CollectionError",
    "UnclassifiedNodeError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
