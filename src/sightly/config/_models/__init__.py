"""Configuration models."""

from ._common import LogFormat, LogLevel
from ._config import Config
from ._logging import LoggingConfig
from ._render import RenderConfig

__all__ = [
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
]
