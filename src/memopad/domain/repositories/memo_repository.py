"""MemoRepository Protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from memopad.domain.entities.memo import Memo, MemoForm


class MemoRepository(Protocol):
    """メモリポジトリ

    失敗時は PersistenceError（またはそのサブクラス）を送出する。
    """

    async def list_all(self) -> list[Memo]:
        """全メモを取得

        作成日時降順でソート。

        Returns:
            メモのリスト
        """
        ...

    async def insert(self, memo: Memo) -> Memo:
        """メモを新規保存

        Args:
            memo: 保存するメモ

        Returns:
            保存されたメモ
        """
        ...

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
        """
        ...

    async def delete(self, memo_id: UUID) -> bool:
        """メモを削除

        Args:
            memo_id: 削除するメモの ID

        Returns:
            削除した場合 True、メモが存在しない場合 False
        """
        ...

    async def find_by_id(self, memo_id: UUID) -> Memo | None:
        """ID でメモを検索

        Args:
            memo_id: メモの ID

        Returns:
            見つかったメモ、または None
        """
        ...
