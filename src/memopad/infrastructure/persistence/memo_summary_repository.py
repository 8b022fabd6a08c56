"""SQLite implementation of MemoSummaryRepository."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from memopad.domain.entities.memo_summary import MemoSummary
from memopad.infrastructure.persistence.datetime_utils import normalize_to_utc
from memopad.infrastructure.persistence.exceptions import DatabaseError
from memopad.infrastructure.persistence.models import MemoSummaryModel

logger = logging.getLogger(__name__)


class SQLiteMemoSummaryRepository:
    """SQLite 版 MemoSummaryRepository 実装

    要約は追記のみで、更新・削除は行わない。
    メモが削除された場合は外部キーの CASCADE で要約も削除される。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def save(self, summary: MemoSummary) -> None:
        """要約を保存

        Args:
            summary: 保存する要約

        Raises:
            DatabaseError: 保存に失敗した場合（対象メモが存在しない場合を含む）
        """
        try:
            async with self._session_factory() as session:
                session.add(
                    MemoSummaryModel(
                        id=str(summary.id),
                        memo_id=str(summary.memo_id),
                        summary=summary.summary,
                        model=summary.model,
                        meta=dict(summary.meta),
                        created_at=normalize_to_utc(summary.created_at),
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to save summary for memo %s: %s", summary.memo_id, e)
            raise DatabaseError(f"Failed to save summary: {e}") from e

    async def find_latest(self, memo_id: UUID) -> MemoSummary | None:
        """最新の要約を取得

        Args:
            memo_id: メモの ID

        Returns:
            最新の要約、存在しない場合は None

        Raises:
            DatabaseError: 取得に失敗した場合
        """
        try:
            async with self._session_factory() as session:
                stmt = (
                    select(MemoSummaryModel)
                    .where(MemoSummaryModel.memo_id == str(memo_id))
                    .order_by(
                        MemoSummaryModel.created_at.desc()  # type: ignore[attr-defined]
                    )
                    .limit(1)
                )
                result = await session.exec(stmt)
                model = result.first()
                if model is None:
                    return None
                return self._to_entity(model)
        except SQLAlchemyError as e:
            logger.error("Failed to load summary for memo %s: %s", memo_id, e)
            raise DatabaseError(f"Failed to load summary: {e}") from e

    def _to_entity(self, model: MemoSummaryModel) -> MemoSummary:
        """MemoSummaryModel を MemoSummary エンティティに変換"""
        return MemoSummary(
            id=UUID(model.id),
            memo_id=UUID(model.memo_id),
            summary=model.summary,
            model=model.model,
            meta=dict(model.meta),
            created_at=normalize_to_utc(model.created_at),
        )
