"""Domain services."""

from memopad.domain.services.memo_filter import (
    ALL_CATEGORIES,
    CategorySelection,
    compute_stats,
    filter_by_category,
    filter_by_search,
    filter_memos,
)
from memopad.domain.services.protocols import MemoSummarizer, TagSuggester

__all__ = [
    "ALL_CATEGORIES",
    "CategorySelection",
    "MemoSummarizer",
    "TagSuggester",
    "compute_stats",
    "filter_by_category",
    "filter_by_search",
    "filter_memos",
]
