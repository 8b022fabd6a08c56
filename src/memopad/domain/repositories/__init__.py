"""Domain repositories."""

from memopad.domain.repositories.memo_repository import MemoRepository
from memopad.domain.repositories.memo_summary_repository import (
    MemoSummaryRepository,
)

__all__ = ["MemoRepository", "MemoSummaryRepository"]
