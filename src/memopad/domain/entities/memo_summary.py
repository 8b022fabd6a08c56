"""MemoSummary entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


@dataclass(frozen=True)
class MemoSummary:
    """メモ要約エンティティ

    要約生成が成功したときにのみ作成され、更新・削除はされない。
    1 つのメモに複数の要約が存在しうるが、参照されるのは最新のものだけ。

    Attributes:
        id: 要約の一意識別子
        memo_id: 要約対象のメモ ID
        summary: 生成された要約テキスト
        model: 生成に使用したモデル名
        meta: 生成時の補足情報
        created_at: 作成日時
    """

    id: UUID
    memo_id: UUID
    summary: str
    model: str
    meta: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """バリデーション"""
        if not self.summary.strip():
            raise ValueError("Summary cannot be empty")


def create_memo_summary(
    memo_id: UUID,
    summary: str,
    model: str,
    meta: dict[str, Any] | None = None,
) -> MemoSummary:
    """MemoSummary エンティティを生成する

    Args:
        memo_id: 要約対象のメモ ID
        summary: 要約テキスト
        model: モデル名
        meta: 補足情報

    Returns:
        MemoSummary エンティティ
    """
    return MemoSummary(
        id=uuid4(),
        memo_id=memo_id,
        summary=summary,
        model=model,
        meta=meta or {},
        created_at=datetime.now(timezone.utc),
    )
