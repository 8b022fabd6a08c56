"""設定データクラス"""

from dataclasses import dataclass


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのcompletionに渡すdict）"""

    model: str
    temperature: float = 0.7
    max_tokens: int = 1000
    api_key: str | None = None


@dataclass
class DatabaseConfig:
    """データベース設定"""

    database_path: str


@dataclass
class ServerConfig:
    """HTTP サーバー設定"""

    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """アプリケーション設定"""

    llm: dict[str, LLMConfig]
    database: DatabaseConfig
    server: ServerConfig
    logging: LoggingConfig | None = None

    def llm_for(self, feature: str) -> LLMConfig:
        """機能別の LLM 設定を取得する（未定義なら default）"""
        return self.llm.get(feature, self.llm["default"])
