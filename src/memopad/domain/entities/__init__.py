"""Domain entities."""

from memopad.domain.entities.memo import (
    DEFAULT_CATEGORY,
    Memo,
    MemoCategory,
    MemoForm,
    create_memo,
    merge_tags,
    normalize_tags,
)
from memopad.domain.entities.memo_stats import MemoStats
from memopad.domain.entities.memo_summary import MemoSummary, create_memo_summary

__all__ = [
    "DEFAULT_CATEGORY",
    "Memo",
    "MemoCategory",
    "MemoForm",
    "MemoStats",
    "MemoSummary",
    "create_memo",
    "create_memo_summary",
    "merge_tags",
    "normalize_tags",
]
