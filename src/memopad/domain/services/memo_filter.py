"""Pure filtering and aggregation over memo sequences."""

from collections.abc import Sequence
from typing import Final, Literal

from memopad.domain.entities.memo import Memo, MemoCategory
from memopad.domain.entities.memo_stats import MemoStats

ALL_CATEGORIES: Final = "all"

CategorySelection = MemoCategory | Literal["all"]


def filter_by_category(
    memos: Sequence[Memo], category: CategorySelection
) -> list[Memo]:
    """カテゴリで絞り込む

    "all" の場合は絞り込まない。

    Args:
        memos: メモのリスト
        category: カテゴリまたは "all"

    Returns:
        絞り込まれたメモのリスト（順序維持）
    """
    if category == ALL_CATEGORIES:
        return list(memos)
    return [memo for memo in memos if memo.category == category]


def filter_by_search(memos: Sequence[Memo], query: str) -> list[Memo]:
    """検索文字列で絞り込む

    空白のみの検索文字列は絞り込みを無効にする。

    Args:
        memos: メモのリスト
        query: 検索文字列

    Returns:
        絞り込まれたメモのリスト（順序維持）
    """
    if not query.strip():
        return list(memos)
    return [memo for memo in memos if memo.matches(query)]


def filter_memos(
    memos: Sequence[Memo], category: CategorySelection, query: str
) -> list[Memo]:
    """カテゴリ、検索文字列の順で絞り込む"""
    return filter_by_search(filter_by_category(memos, category), query)


def compute_stats(memos: Sequence[Memo], filtered: Sequence[Memo]) -> MemoStats:
    """統計情報を計算する

    Args:
        memos: フィルタ前のメモ
        filtered: フィルタ後のメモ

    Returns:
        MemoStats
    """
    by_category = {category: 0 for category in MemoCategory}
    for memo in memos:
        by_category[memo.category] += 1
    return MemoStats(
        total=len(memos),
        by_category=by_category,
        filtered=len(filtered),
    )
