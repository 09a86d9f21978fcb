"""Source file discovery."""

from .files import JavaFileCollector, iter_java_files

__all__ = ["JavaFileCollector", "iter_java_files"]
