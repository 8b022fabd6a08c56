"""config.yaml の読み込み

${VAR_NAME} 形式の参照は環境変数の値で置き換えてから検証する。
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from memopad.config.models import (
    Config,
    DatabaseConfig,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
)


class ConfigError(Exception):
    """設定読み込みエラーの基底クラス"""


class ConfigValidationError(ConfigError):
    """必須項目の欠落など、設定内容が不正"""


class EnvironmentVariableError(ConfigError):
    """参照された環境変数が定義されていない"""


_ENV_REF = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """${VAR_NAME} を環境変数の値で置き換える

    Args:
        value: 展開前の文字列

    Returns:
        展開後の文字列

    Raises:
        EnvironmentVariableError: 参照先の環境変数が未定義
    """

    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            raise EnvironmentVariableError(
                f"Environment variable '{name}' is not set"
            )
        return os.environ[name]

    return _ENV_REF.sub(lookup, value) if value else value


def _expand(node: Any) -> Any:
    """YAML から読んだ値に含まれる文字列をすべて展開する"""
    if isinstance(node, str):
        return expand_env_vars(node)
    if isinstance(node, list):
        return [_expand(item) for item in node]
    if isinstance(node, dict):
        return {key: _expand(item) for key, item in node.items()}
    return node


def _require(section: dict[str, Any], key: str, path: str = "") -> Any:
    """必須キーの値を返す

    Raises:
        ConfigValidationError: キーがない、または値が null
    """
    if section.get(key) is None:
        name = f"{path}.{key}" if path else key
        raise ConfigValidationError(f"Required field '{name}' is missing")
    return section[key]


def _load_llm(section: dict[str, Any]) -> dict[str, LLMConfig]:
    """llm セクション（default は必須、summary / tags は任意）"""
    _require(section, "default", "llm")
    return {
        name: LLMConfig(
            model=_require(entry, "model", f"llm.{name}"),
            temperature=float(entry.get("temperature", 0.7)),
            max_tokens=int(entry.get("max_tokens", 1000)),
            api_key=entry.get("api_key") or None,
        )
        for name, entry in section.items()
    }


def _load_database(section: dict[str, Any]) -> DatabaseConfig:
    return DatabaseConfig(
        database_path=str(_require(section, "database_path", "database"))
    )


def _load_server(section: dict[str, Any] | None) -> ServerConfig:
    section = section or {}
    defaults = ServerConfig()
    return ServerConfig(
        host=section.get("host", defaults.host),
        port=int(section.get("port", defaults.port)),
    )


def _load_logging(section: dict[str, Any] | None) -> LoggingConfig | None:
    if not section:
        return None
    defaults = LoggingConfig()
    return LoggingConfig(
        level=section.get("level", defaults.level),
        format=section.get("format", defaults.format),
        loggers=section.get("loggers"),
    )


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込んで Config を組み立てる

    Args:
        path: 設定ファイルのパス

    Returns:
        Config

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落している
        EnvironmentVariableError: 参照された環境変数が未定義
        yaml.YAMLError: YAML として読めない
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open(encoding="utf-8") as f:
        data = _expand(yaml.safe_load(f) or {})

    return Config(
        llm=_load_llm(_require(data, "llm")),
        database=_load_database(_require(data, "database")),
        server=_load_server(data.get("server")),
        logging=_load_logging(data.get("logging")),
    )
