"""SQLite implementation of MemoRepository."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from memopad.domain.entities.memo import Memo, MemoCategory, MemoForm
from memopad.domain.exceptions import NotFoundError
from memopad.infrastructure.persistence.datetime_utils import normalize_to_utc
from memopad.infrastructure.persistence.exceptions import DatabaseError
from memopad.infrastructure.persistence.models import MemoModel

logger = logging.getLogger(__name__)


class SQLiteMemoRepository:
    """SQLite 版 MemoRepository 実装

    メモの CRUD 操作を SQLite データベースに対して行う。
    SQLAlchemy のエラーは DatabaseError に変換して送出する。
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

    async def list_all(self) -> list[Memo]:
        """全メモを作成日時降順で取得

        Returns:
            メモのリスト

        Raises:
            DatabaseError: 取得に失敗した場合
        """
        try:
            async with self._session_factory() as session:
                stmt = select(MemoModel).order_by(
                    MemoModel.created_at.desc()  # type: ignore[attr-defined]
                )
                result = await session.exec(stmt)
                return [self._to_entity(row) for row in result.all()]
        except SQLAlchemyError as e:
            logger.error("Failed to load memos: %s", e)
            raise DatabaseError(f"Failed to load memos: {e}") from e

    async def insert(self, memo: Memo) -> Memo:
        """メモを新規保存

        Args:
            memo: 保存するメモ

        Returns:
            保存されたメモ

        Raises:
            DatabaseError: 保存に失敗した場合（ID の重複を含む）
        """
        try:
            async with self._session_factory() as session:
                model = MemoModel(
                    id=str(memo.id),
                    title=memo.title,
                    content=memo.content,
                    category=memo.category.value,
                    tags=list(memo.tags),
                    created_at=normalize_to_utc(memo.created_at),
                    updated_at=normalize_to_utc(memo.updated_at),
                )
                session.add(model)
                await session.commit()
                return self._to_entity(model)
        except SQLAlchemyError as e:
            logger.error("Failed to create memo %s: %s", memo.id, e)
            raise DatabaseError(f"Failed to create memo: {e}") from e

    async def update(self, memo_id: UUID, form: MemoForm, updated_at: datetime) -> Memo:
        """メモを更新

        Args:
            memo_id: 更新するメモの ID
            form: 新しい入力値
            updated_at: 更新日時

        Returns:
            更新後のメモ

        Raises:
            NotFoundError: メモが存在しない場合
            DatabaseError: 更新に失敗した場合
        """
        try:
            async with self._session_factory() as session:
                model = await session.get(MemoModel, str(memo_id))
                if model is None:
                    raise NotFoundError(memo_id)
                model.title = form.title
                model.content = form.content
                model.category = form.category.value
                model.tags = list(form.tags)
                model.updated_at = normalize_to_utc(updated_at)
                session.add(model)
                await session.commit()
                return self._to_entity(model)
        except SQLAlchemyError as e:
            logger.error("Failed to update memo %s: %s", memo_id, e)
            raise DatabaseError(f"Failed to update memo: {e}") from e

    async def delete(self, memo_id: UUID) -> bool:
        """メモを削除

        Args:
            memo_id: 削除するメモの ID

        Returns:
            削除成功の場合 True、メモが存在しない場合 False

        Raises:
            DatabaseError: 削除に失敗した場合
        """
        try:
            async with self._session_factory() as session:
                stmt = delete(MemoModel).where(
                    MemoModel.id == str(memo_id)  # type: ignore[arg-type]
                )
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount > 0  # type: ignore[attr-defined]
        except SQLAlchemyError as e:
            logger.error("Failed to delete memo %s: %s", memo_id, e)
            raise DatabaseError(f"Failed to delete memo: {e}") from e

    async def find_by_id(self, memo_id: UUID) -> Memo | None:
        """ID でメモを検索

        Args:
            memo_id: メモの ID

        Returns:
            見つかったメモ、または None
        """
        try:
            async with self._session_factory() as session:
                result = await session.get(MemoModel, str(memo_id))
                if result is None:
                    return None
                return self._to_entity(result)
        except SQLAlchemyError as e:
            logger.error("Failed to load memo %s: %s", memo_id, e)
            raise DatabaseError(f"Failed to load memo: {e}") from e

    def _to_entity(self, model: MemoModel) -> Memo:
        """MemoModel を Memo エンティティに変換

        Args:
            model: MemoModel インスタンス

        Returns:
            Memo エンティティ
        """
        return Memo(
            id=UUID(model.id),
            title=model.title,
            content=model.content,
            category=MemoCategory.parse(model.category),
            tags=list(model.tags),
            created_at=normalize_to_utc(model.created_at),
            updated_at=normalize_to_utc(model.updated_at),
        )
