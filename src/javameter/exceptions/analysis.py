"""Analysis-related exceptions: file access, parsing, language levels."""

from pathlib import Path
from typing import Dict, List, Optional

from .base import JavameterError


class AnalysisError(JavameterError):
    """Base class for errors raised while turning source into a syntax tree."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when a compilation unit cannot be parsed.

    ``line`` is the 1-based line of the first problem when it is known.
    """

    def __init__(self, unit_name: str, reason: str, line: Optional[int] = None):
        details: Dict[str, str] = {"unit": unit_name, "reason": reason}
        if line is not None:
            details["line"] = str(line)

        super().__init__(f"Failed to parse Java compilation unit: {unit_name}", details=details)
        self.unit_name = unit_name
        self.reason = reason
        self.line = line


class UnsupportedLanguageLevelError(AnalysisError):
    """Raised when asked for a Java language level the front end does not know."""

    def __init__(self, level: object, supported_levels: List[int]):
        super().__init__(
            f"Unsupported Java language level: {level}",
            details={"level": str(level), "supported": ", ".join(map(str, supported_levels))},
        )
        self.level = level
        self.supported_levels = supported_levels
