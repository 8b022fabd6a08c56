"""Persistence infrastructure."""

from memopad.infrastructure.persistence.database import DatabaseManager
from memopad.infrastructure.persistence.exceptions import DatabaseError
from memopad.infrastructure.persistence.memo_repository import SQLiteMemoRepository
from memopad.infrastructure.persistence.memo_summary_repository import (
    SQLiteMemoSummaryRepository,
)
from memopad.infrastructure.persistence.models import MemoModel, MemoSummaryModel

__all__ = [
    "DatabaseError",
    "DatabaseManager",
    "MemoModel",
    "MemoSummaryModel",
    "SQLiteMemoRepository",
    "SQLiteMemoSummaryRepository",
]
