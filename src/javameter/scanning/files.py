"""Java source discovery and per-file collection."""

import fnmatch
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional

from ..collect import JavaMetricsCollector
from ..config import CollectorConfig
from ..exceptions import FileAccessError, InvalidPathError, JavameterError
from ..logging_config import get_logger

logger = get_logger(__name__)

JAVA_SUFFIX = ".java"


def iter_java_files(
    paths: Iterable[Path],
    exclude_patterns: Iterable[str] = (),
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Yield the Java source files below ``paths``.

    Files given directly are yielded as they are, whatever their suffix.
    Directories are walked in sorted order and contribute their ``.java``
    files that match none of ``exclude_patterns``.

    Raises:
        InvalidPathError: If a path does not exist
    """
    patterns = list(exclude_patterns)

    for path in paths:
        if not path.exists():
            raise InvalidPathError(path, "does not exist")
        if path.is_file():
            yield path
            continue

        for dirpath, dirnames, filenames in os.walk(path, followlinks=follow_symlinks):
            dirnames.sort()
            for filename in sorted(filenames):
                if not filename.endswith(JAVA_SUFFIX):
                    continue
                candidate = Path(dirpath) / filename
                if candidate.is_symlink() and not follow_symlinks:
                    continue
                if not candidate.is_file():
                    continue
                if _is_excluded(candidate.relative_to(path), patterns):
                    logger.debug("Excluded %s", candidate)
                    continue
                yield candidate


def _is_excluded(relative: Path, patterns: list[str]) -> bool:
    text = relative.as_posix()
    return any(fnmatch.fnmatch(text, p) or fnmatch.fnmatch(f"./{text}", p) for p in patterns)


class JavaFileCollector:
    """Feeds source files into a ``JavaMetricsCollector``.

    A file that cannot be read, parsed or collected is logged and skipped;
    the remaining files are still collected.
    """

    def __init__(self, collector: JavaMetricsCollector, config: Optional[CollectorConfig] = None):
        self.collector = collector
        self.config = config or CollectorConfig()
        self.num_files = 0
        self.failed_files: list[Path] = []

    def collect_paths(self, paths: Iterable[Path]) -> int:
        """Collect every Java file below ``paths``; returns the number collected."""
        for path in iter_java_files(
            paths, self.config.exclude_patterns, self.config.follow_symlinks
        ):
            self.collect_file(path)
        return self.num_files

    def collect_file(self, path: Path) -> bool:
        try:
            source = self._read(path)
            self.collector.collect(path.name, source)
        except JavameterError as e:
            logger.warning("Failed to collect metrics from %s: %s", path, e)
            self.failed_files.append(path)
            return False

        self.num_files += 1
        return True

    def _read(self, path: Path) -> str:
        try:
            size = path.stat().st_size
        except OSError as e:
            raise FileAccessError(path, f"OS error: {e}")
        if size > self.config.max_file_size_bytes:
            raise FileAccessError(
                path, f"File too large: {size} bytes (limit {self.config.max_file_size_bytes})"
            )

        try:
            return path.read_text(encoding=self.config.encoding)
        except UnicodeDecodeError as e:
            raise FileAccessError(path, f"Encoding error: {e}")
        except OSError as e:
            raise FileAccessError(path, f"OS error: {e}")
