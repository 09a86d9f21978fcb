"""Tree-sitter based Java parser.

Usage:
    parser = JavaSourceParser(JavaLanguageLevel.JAVA_11)
    unit = parser.parse("Example.java", source_text)

The returned compilation unit has every comment of the source placed in a
comment slot of some node (see ``syntax.comments``).
"""

from __future__ import annotations

from typing import Union

import tree_sitter
import tree_sitter_java

from ..logging_config import get_logger
from .builder import SyntaxTreeBuilder
from .comments import place_comments
from .language_level import JavaLanguageLevel
from .nodes import CompilationUnit

logger = get_logger(__name__)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())


class JavaSourceParser:
    """Parses Java compilation units into ``syntax.nodes`` trees.

    Constructs newer than ``language_level`` raise ``ParsingError``, as do
    syntax errors. One parser may be reused for any number of units.
    """

    def __init__(
        self,
        language_level: JavaLanguageLevel = JavaLanguageLevel.default(),
        enable_preview: bool = False,
    ) -> None:
        self.language_level = language_level
        self.enable_preview = enable_preview
        self._parser = tree_sitter.Parser(_JAVA_LANGUAGE)

    def parse(self, name: str, source: Union[str, bytes]) -> CompilationUnit:
        """Parse one compilation unit.

        Args:
            name: Unit name used in error messages (usually the file name)
            source: Source text; ``bytes`` must be UTF-8

        Raises:
            ParsingError: On syntax errors or unsupported language features
        """
        code = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._parser.parse(code)

        builder = SyntaxTreeBuilder(name, self.language_level, self.enable_preview)
        unit, comments = builder.build(tree.root_node)
        place_comments(unit, comments)

        logger.debug(
            "Parsed %s: %d types, %d comments", name, len(unit.types), len(comments)
        )
        return unit
