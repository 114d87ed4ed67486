"""Sightly runtime configuration.

Basic usage:
    from sightly.config import Config

    config = Config.load(Path("sightly.toml"))
    config.logging.level      # LogLevel.INFO
    config.render.strict_extensions

Environment variables override file values:
    SIGHTLY_LOGGING__LEVEL=debug
    SIGHTLY_RENDER__STRICT_EXTENSIONS=false
"""

from ._defaults import DEFAULT_CONFIG
from ._loader import deep_merge, parse_env_vars, read_toml_file, set_nested_key
from ._models import Config, LogFormat, LoggingConfig, LogLevel, RenderConfig

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
    "deep_merge",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
