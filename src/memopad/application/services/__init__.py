"""Application services."""

from memopad.application.services.memo_query_view import (
    MemoQueryView,
    parse_category_selection,
)
from memopad.application.services.memo_store import MemoStore

__all__ = ["MemoQueryView", "MemoStore", "parse_category_selection"]
