"""アプリケーションのエントリポイント"""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from memopad.application.services import MemoQueryView, MemoStore
from memopad.application.use_cases import SuggestTagsUseCase, SummarizeMemoUseCase
from memopad.config import ConfigError, LoggingConfig, load_config
from memopad.infrastructure.http import ApiServer
from memopad.infrastructure.llm import LLMClient, LLMMemoSummarizer, LLMTagSuggester
from memopad.infrastructure.persistence import (
    DatabaseManager,
    SQLiteMemoRepository,
    SQLiteMemoSummaryRepository,
)
from memopad.presentation import create_app

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(config: LoggingConfig | None) -> None:
    """設定ファイルの logging セクションを適用する

    Args:
        config: ログ設定。None の場合は basicConfig のまま
    """
    if config is None:
        return

    root = logging.getLogger()
    root.setLevel(_level(config.level))
    formatter = logging.Formatter(config.format)
    for handler in root.handlers:
        handler.setFormatter(formatter)

    for name, level in (config.loggers or {}).items():
        logging.getLogger(name).setLevel(_level(level))
        logger.debug("Logger %s set to %s", name, level.upper())


async def main() -> None:
    """アプリケーションを起動する"""
    config_path = Path(os.environ.get("MEMOPAD_CONFIG", "config.yaml"))
    if not config_path.exists():
        logger.error("%s not found", config_path)
        sys.exit(1)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    # Apply logging configuration
    configure_logging(config.logging)

    # Initialize database
    db_manager = DatabaseManager(config.database.database_path)
    await db_manager.create_tables()

    memo_repository = SQLiteMemoRepository(db_manager.get_session)
    summary_repository = SQLiteMemoSummaryRepository(db_manager.get_session)

    # LLM clients (summary / tags fall back to default)
    summarizer = LLMMemoSummarizer(LLMClient(config.llm_for("summary")))
    tag_suggester = LLMTagSuggester(LLMClient(config.llm_for("tags")))

    store = MemoStore(memo_repository)
    query_view = MemoQueryView(store)
    await store.load_all()
    if store.error:
        logger.warning("Starting with an empty memo collection: %s", store.error)

    app = create_app(
        store=store,
        query_view=query_view,
        summarize_use_case=SummarizeMemoUseCase(summarizer, summary_repository),
        suggest_tags_use_case=SuggestTagsUseCase(tag_suggester),
    )
    server = ApiServer(
        app,
        db_manager,
        host=config.server.host,
        port=config.server.port,
    )
    await server.start()

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    # Wait for shutdown signal
    await stop_event.wait()

    logger.info("Shutting down...")
    await server.stop()
    await db_manager.close()
    logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
