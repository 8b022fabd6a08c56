"""SQLModel table definitions."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, ForeignKey, String
from sqlmodel import Field, SQLModel


class MemoModel(SQLModel, table=True):
    """メモテーブル"""

    __tablename__ = "memos"

    id: str = Field(primary_key=True)
    title: str
    content: str
    category: str = Field(default="personal", index=True)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(index=True)
    updated_at: datetime


class MemoSummaryModel(SQLModel, table=True):
    """メモ要約テーブル（追記のみ）"""

    __tablename__ = "memo_summaries"

    id: str = Field(primary_key=True)
    memo_id: str = Field(
        sa_column=Column(
            String,
            ForeignKey("memos.id", ondelete="CASCADE"),
            index=True,
            nullable=False,
        )
    )
    summary: str
    model: str
    meta: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
