"""SQLite engine and session management."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# Registers the table classes on SQLModel.metadata
from memopad.infrastructure.persistence import models as _models  # noqa: F401

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """memo_summaries の ON DELETE CASCADE を効かせる"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """メモ用 SQLite データベースの管理

    エンジンは初回アクセス時に生成し、close() まで使い回す。
    """

    def __init__(self, database_path: str) -> None:
        """初期化

        Args:
            database_path: データベースファイルのパス。":memory:" でインメモリ DB
        """
        self._database_path = database_path
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _url(self) -> str:
        if self._database_path == MEMORY_DATABASE:
            return f"sqlite+aiosqlite:///{MEMORY_DATABASE}"
        Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+aiosqlite:///{self._database_path}"

    def get_engine(self) -> AsyncEngine:
        """非同期エンジンを返す

        ファイル DB の場合、親ディレクトリがなければ作成する。
        """
        if self._engine is None:
            self._engine = create_async_engine(self._url())
            event.listen(self._engine.sync_engine, "connect", _enable_foreign_keys)
            self._session_factory = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._engine

    async def create_tables(self) -> None:
        """memos / memo_summaries テーブルを作成する（既存なら何もしない）"""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database ready: %s", self._database_path)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """リポジトリ用のセッションを開く"""
        self.get_engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            yield session

    async def is_healthy(self) -> bool:
        """SELECT 1 が通るかどうか"""
        try:
            async with self.get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return False
        return True

    async def close(self) -> None:
        """エンジンを破棄する。再度 get_engine() を呼ぶと作り直す"""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
