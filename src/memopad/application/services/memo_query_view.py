"""Filtered view over the memo store."""

from memopad.application.services.memo_store import MemoStore
from memopad.domain.entities.memo import Memo, MemoCategory
from memopad.domain.entities.memo_stats import MemoStats
from memopad.domain.exceptions import ValidationError
from memopad.domain.services.memo_filter import (
    ALL_CATEGORIES,
    CategorySelection,
    compute_stats,
    filter_memos,
)


def parse_category_selection(value: str | MemoCategory | None) -> CategorySelection:
    """カテゴリ選択値を解釈する

    None と "all" は絞り込みなしを表す。

    Args:
        value: カテゴリ文字列、MemoCategory、または None

    Returns:
        MemoCategory または "all"

    Raises:
        ValidationError: 未知のカテゴリの場合
    """
    if value is None or value == ALL_CATEGORIES:
        return ALL_CATEGORIES
    try:
        return MemoCategory(value)
    except ValueError as e:
        raise ValidationError(f"Unknown category: {value}") from e


class MemoQueryView:
    """MemoStore の絞り込み結果と統計を提供するビュー

    保持するのは検索文字列とカテゴリ選択だけで、
    結果は参照のたびにストアの現在のコレクションから計算する。
    """

    def __init__(self, store: MemoStore) -> None:
        """初期化

        Args:
            store: 参照するメモストア
        """
        self._store = store
        self._search_query = ""
        self._selected_category: CategorySelection = ALL_CATEGORIES

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def selected_category(self) -> CategorySelection:
        return self._selected_category

    def search(self, query: str) -> None:
        """検索文字列を設定する"""
        self._search_query = query

    def filter_by_category(self, category: str | MemoCategory | None) -> None:
        """カテゴリ選択を設定する

        Raises:
            ValidationError: 未知のカテゴリの場合
        """
        self._selected_category = parse_category_selection(category)

    def reset(self) -> None:
        """検索文字列とカテゴリ選択を初期状態に戻す"""
        self._search_query = ""
        self._selected_category = ALL_CATEGORIES

    @property
    def memos(self) -> list[Memo]:
        """絞り込み後のメモ（ストアの順序のまま）"""
        return filter_memos(
            self._store.memos, self._selected_category, self._search_query
        )

    @property
    def stats(self) -> MemoStats:
        """統計情報"""
        return compute_stats(self._store.memos, self.memos)
