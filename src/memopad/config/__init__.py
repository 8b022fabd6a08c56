"""設定管理モジュール"""

from memopad.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from memopad.config.models import (
    Config,
    DatabaseConfig,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DatabaseConfig",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "ServerConfig",
    "expand_env_vars",
    "load_config",
]
