"""MemoSummaryRepository Protocol."""

from typing import Protocol
from uuid import UUID

from memopad.domain.entities.memo_summary import MemoSummary


class MemoSummaryRepository(Protocol):
    """メモ要約リポジトリ（追記のみ）"""

    async def save(self, summary: MemoSummary) -> None:
        """要約を保存

        Args:
            summary: 保存する要約

        Raises:
            PersistenceError: 保存に失敗した場合
        """
        ...

    async def find_latest(self, memo_id: UUID) -> MemoSummary | None:
        """最新の要約を取得

        Args:
            memo_id: メモの ID

        Returns:
            最新の要約、存在しない場合は None
        """
        ...
