"""Java syntax front end: tree-sitter parsing into the collector's syntax tree."""

from .language_level import JavaLanguageLevel, LanguageFeature
from .parser import JavaSourceParser

__all__ = [
    "JavaLanguageLevel",
    "LanguageFeature",
    "JavaSourceParser",
]
