"""Datetime utilities for persistence layer."""

from datetime import datetime, timezone


def normalize_to_utc(dt: datetime) -> datetime:
    """UTC の timezone-aware な datetime に揃える

    保存時は常にこの形で書き込む（SQLModel は naive な値を拒否する）。
    SQLite から読み出した naive な値は UTC として扱い、aware な値は UTC に変換する。

    Args:
        dt: 変換対象の datetime

    Returns:
        UTC の timezone-aware な datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
