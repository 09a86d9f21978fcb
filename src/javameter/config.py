"""Configuration loading and management for javameter.

Configuration sources are merged in priority order:
    1. Defaults (defined in CollectorConfig)
    2. Global config (~/.javameter.toml)
    3. Project config (./javameter.toml)
    4. Explicit config file
    5. Environment variables (JAVAMETER_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(language_level=11, report_format="xml")
    >>> config.language_level
    11
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, JavameterError

Verbosity = Literal["quiet", "normal", "verbose"]
ReportFormat = Literal["text", "json", "xml"]

ENV_PREFIX = "JAVAMETER_"
CONFIG_FILE_NAME = "javameter.toml"

MIN_LANGUAGE_LEVEL = 8
MAX_LANGUAGE_LEVEL = 21


@dataclass(frozen=True)
class CollectorConfig:
    """Configuration for a metrics collection run.

    Attributes:
        Parsing:
            language_level: Java release whose syntax is accepted (8-21)
            enable_preview: Accept preview features of that release
            encoding: Character encoding of the source files

        File filtering:
            exclude_patterns: Glob patterns of paths to skip
            max_file_size_mb: Larger files are skipped with a warning
            follow_symlinks: Follow symbolic links while walking directories

        Output control:
            report_format: One of "text", "json", "xml"
            verbosity: Logging verbosity level
    """

    # Parsing
    language_level: int = MAX_LANGUAGE_LEVEL
    enable_preview: bool = False
    encoding: str = "utf-8"

    # File filtering
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            ".git/*",
            "*/.git/*",
            "*/build/generated/*",
            "*/target/generated-sources/*",
        ]
    )
    max_file_size_mb: float = 10.0
    follow_symlinks: bool = False

    # Output control
    report_format: ReportFormat = "text"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not MIN_LANGUAGE_LEVEL <= self.language_level <= MAX_LANGUAGE_LEVEL:
            raise InvalidConfigError(
                "language_level",
                self.language_level,
                f"must be between {MIN_LANGUAGE_LEVEL} and {MAX_LANGUAGE_LEVEL}",
            )
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.report_format not in ("text", "json", "xml"):
            raise InvalidConfigError(
                "report_format", self.report_format, "must be one of text, json, xml"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )
        try:
            "".encode(self.encoding)
        except LookupError:
            raise InvalidConfigError("encoding", self.encoding, "unknown encoding")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> CollectorConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask files.

    Returns:
        Validated CollectorConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILE_NAME}"
    if global_config.exists():
        merged.update(_load_config_section(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILE_NAME
    if project_config.exists():
        merged.update(_load_config_section(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_section(config_file, "config file"))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CollectorConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_config_section(path: Path, description: str) -> dict:
    """Read a TOML file; settings may sit at top level or under [javameter]."""
    try:
        data = _load_toml_file(path)
    except JavameterError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {description} '{path}': {e}")
    section = data.get("javameter", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {description} '{path}': [javameter] must be a table")
    return section


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from JAVAMETER_* environment variables.

    Supported environment variables:
        JAVAMETER_LANGUAGE_LEVEL: int
        JAVAMETER_ENABLE_PREVIEW: bool (true/false/1/0)
        JAVAMETER_ENCODING: str
        JAVAMETER_MAX_FILE_SIZE_MB: float
        JAVAMETER_FOLLOW_SYMLINKS: bool
        JAVAMETER_REPORT_FORMAT: text/json/xml
        JAVAMETER_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any JAVAMETER_* vars found.
    """
    type_hints = get_type_hints(CollectorConfig)

    result: dict[str, Any] = {}

    for field_name in CollectorConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single variable
    (lists), which leaves the field at its lower-priority value.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
