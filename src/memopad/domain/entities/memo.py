"""Memo entity."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from memopad.domain.exceptions import ValidationError


class MemoCategory(Enum):
    """メモのカテゴリ"""

    PERSONAL = "personal"
    WORK = "work"
    STUDY = "study"
    IDEA = "idea"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "str | MemoCategory | None") -> "MemoCategory":
        """文字列をカテゴリに変換する

        未知の値は OTHER として扱う。None はデフォルトカテゴリになる。

        Args:
            value: カテゴリ文字列

        Returns:
            MemoCategory
        """
        if isinstance(value, MemoCategory):
            return value
        if value is None:
            return DEFAULT_CATEGORY
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


DEFAULT_CATEGORY = MemoCategory.PERSONAL


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """タグを正規化する

    前後の空白を除去し、空のタグと重複を取り除く。順序は維持する。

    Args:
        tags: タグ

    Returns:
        正規化されたタグリスト
    """
    return merge_tags([], (tag.strip() for tag in tags))


def merge_tags(existing: Iterable[str], suggested: Iterable[str]) -> list[str]:
    """既存タグの後ろに提案タグを追加する

    大文字小文字を区別して、既にあるタグは追加しない。

    Args:
        existing: 既存のタグ
        suggested: 追加するタグ

    Returns:
        マージされたタグリスト
    """
    merged: list[str] = []
    for tag in [*existing, *suggested]:
        if tag and tag not in merged:
            merged.append(tag)
    return merged


@dataclass(frozen=True)
class MemoForm:
    """メモの入力値

    Attributes:
        title: タイトル
        content: 本文（Markdown）
        category: カテゴリ
        tags: タグリスト
    """

    title: str
    content: str
    category: MemoCategory = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", MemoCategory.parse(self.category))
        object.__setattr__(self, "tags", normalize_tags(self.tags))

    def validate(self) -> None:
        """必須項目を検証する

        Raises:
            ValidationError: タイトルまたは本文が空の場合
        """
        if not self.title.strip():
            raise ValidationError("Title cannot be empty")
        if not self.content.strip():
            raise ValidationError("Content cannot be empty")


@dataclass(frozen=True)
class Memo:
    """メモエンティティ

    Attributes:
        id: メモの一意識別子（UUID）
        title: タイトル
        content: 本文（Markdown）
        category: カテゴリ
        tags: タグリスト（重複なし、追加順）
        created_at: 作成日時
        updated_at: 更新日時
    """

    id: UUID
    title: str
    content: str
    category: MemoCategory
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """バリデーション"""
        if not self.title.strip():
            raise ValueError("Title cannot be empty")
        if not self.content.strip():
            raise ValueError("Content cannot be empty")
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")

    def matches(self, query: str) -> bool:
        """タイトル・本文・タグのいずれかに query が含まれるか

        大文字小文字は区別しない。

        Args:
            query: 検索文字列

        Returns:
            含まれる場合 True
        """
        needle = query.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


def create_memo(form: MemoForm, now: datetime | None = None) -> Memo:
    """Memo エンティティを生成する

    Args:
        form: 入力値
        now: 作成日時（省略時は現在時刻）

    Returns:
        created_at と updated_at が等しい Memo エンティティ

    Raises:
        ValidationError: 入力値が不正な場合
    """
    form.validate()
    now = now or datetime.now(timezone.utc)
    return Memo(
        id=uuid4(),
        title=form.title,
        content=form.content,
        category=form.category,
        tags=list(form.tags),
        created_at=now,
        updated_at=now,
    )
