"""Memo collection statistics."""

from dataclasses import dataclass

from memopad.domain.entities.memo import MemoCategory


@dataclass(frozen=True)
class MemoStats:
    """メモ統計情報

    Attributes:
        total: フィルタ前の件数
        by_category: カテゴリ別件数（フィルタ前、全カテゴリを含む）
        filtered: フィルタ後の件数
    """

    total: int
    by_category: dict[MemoCategory, int]
    filtered: int
