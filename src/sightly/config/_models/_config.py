# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

Configuration is merged from three layers, later layers winning:
built-in defaults, an optional TOML file, and ``SIGHTLY_*`` environment
variables.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Used at runtime in type annotation
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from sightly.config._defaults import DEFAULT_CONFIG
from sightly.config._loader import deep_merge, parse_env_vars, read_toml_file
from sightly.config._models._common import LogFormat, LogLevel
from sightly.config._models._logging import LoggingConfig
from sightly.config._models._render import RenderConfig


def _parse_log_level(value: object) -> LogLevel:
    """Parse a log level, defaulting to INFO for unknown values."""
    try:
        return LogLevel(str(value).lower())
    except ValueError:
        return LogLevel.INFO


def _parse_log_format(value: object) -> LogFormat:
    """Parse a log format, defaulting to JSON for unknown values."""
    try:
        return LogFormat(str(value).lower())
    except ValueError:
        return LogFormat.JSON


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_log_level(data.get("level", "info")),
        format=_parse_log_format(data.get("format", "json")),
        file=str(data.get("file", "")),
    )


def _parse_render(data: dict[str, Any]) -> RenderConfig:
    strict = data.get("strict_extensions", True)
    return RenderConfig(strict_extensions=strict if isinstance(strict, bool) else True)


class Config(BaseModel):
    """Immutable runtime configuration.

    Use the factory methods rather than the constructor.

    Attributes:
        logging: Logging section.
        render: Render section.
        path: The TOML file the configuration was read from, if any.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    path: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, path: Path | None = None) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Unknown keys are ignored and invalid values fall back to defaults.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls(
            logging=_parse_logging(merged.get("logging", {})),
            render=_parse_render(merged.get("render", {})),
            path=path,
        )

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
        """
        return cls.from_dict(read_toml_file(path), path=path)

    @classmethod
    def load(cls, path: Path | None = None, *, include_env: bool = True) -> Self:
        """Load configuration from defaults, an optional file and the environment.

        Args:
            path: Optional TOML file to read.
            include_env: Whether ``SIGHTLY_*`` environment variables override
                file values.

        Raises:
            FileNotFoundError: If ``path`` is given but does not exist.
            ConfigLoadError: If the file cannot be parsed.
        """
        data: dict[str, Any] = read_toml_file(path) if path is not None else {}
        if include_env:
            data = deep_merge(data, parse_env_vars())
        return cls.from_dict(data, path=path)
