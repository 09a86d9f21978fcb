"""Java language levels and the syntax features each of them introduced."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..exceptions import UnsupportedLanguageLevelError


class JavaLanguageLevel(Enum):
    JAVA_8 = 8
    JAVA_9 = 9
    JAVA_10 = 10
    JAVA_11 = 11
    JAVA_12 = 12
    JAVA_13 = 13
    JAVA_14 = 14
    JAVA_15 = 15
    JAVA_16 = 16
    JAVA_17 = 17
    JAVA_18 = 18
    JAVA_19 = 19
    JAVA_20 = 20
    JAVA_21 = 21

    @classmethod
    def default(cls) -> JavaLanguageLevel:
        return cls.JAVA_21

    @classmethod
    def for_number(cls, number: int) -> JavaLanguageLevel:
        """Get the level for a release number such as 11 or 17."""
        try:
            return cls(number)
        except ValueError:
            raise UnsupportedLanguageLevelError(number, [level.value for level in cls])

    @property
    def number(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"Java {self.value}"


class LanguageFeature(Enum):
    """A syntax feature with the release that made it standard and, where it
    had one, the first release that offered it as a preview."""

    MODULES = ("modules", 9, None)
    PRIVATE_INTERFACE_METHODS = ("private interface methods", 9, None)
    SWITCH_EXPRESSIONS = ("switch expressions and rules", 14, 12)
    YIELD = ("'yield' statements", 14, 13)
    TEXT_BLOCKS = ("text blocks", 15, 13)
    INSTANCEOF_PATTERNS = ("pattern matching for instanceof", 16, 14)
    RECORDS = ("records", 16, 14)
    SEALED_CLASSES = ("sealed classes", 17, 15)

    def __init__(self, description: str, standard_level: int, preview_level: Optional[int]):
        self.description = description
        self.standard_level = standard_level
        self.preview_level = preview_level

    def is_supported(self, level: JavaLanguageLevel, enable_preview: bool = False) -> bool:
        if level.number >= self.standard_level:
            return True
        return (
            enable_preview
            and self.preview_level is not None
            and level.number >= self.preview_level
        )
