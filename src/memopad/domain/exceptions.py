"""Domain exceptions."""

from collections.abc import Sequence
from uuid import UUID


class MemopadError(Exception):
    """memopad の基底例外"""


class ValidationError(MemopadError):
    """必須入力の欠落や不正な入力"""


class ConfigurationError(MemopadError):
    """外部サービスの認証情報などが設定されていない"""


class SuggestionError(MemopadError):
    """LLM が利用できる出力を返さなかった"""


class EmptyReplyError(SuggestionError):
    """LLM の応答が空"""


class NoTagsExtractedError(SuggestionError):
    """応答からタグを 1 つも抽出できなかった"""


class PersistenceError(MemopadError):
    """永続化層が操作を拒否した"""


class NotFoundError(PersistenceError):
    """参照したメモが存在しない場合に発生する例外"""

    def __init__(self, memo_id: UUID, message: str = "") -> None:
        """初期化

        Args:
            memo_id: 見つからなかったメモの ID
            message: エラーメッセージ（オプション）
        """
        self.memo_id = memo_id
        super().__init__(message or f"Memo {memo_id} not found")


class PartialDeletionError(PersistenceError):
    """一括削除の一部が失敗した場合に発生する例外

    成功した削除は取り消されない。
    """

    def __init__(self, failed_ids: Sequence[UUID], total: int) -> None:
        """初期化

        Args:
            failed_ids: 削除に失敗したメモの ID
            total: 削除を試みたメモの件数
        """
        self.failed_ids = list(failed_ids)
        self.total = total
        super().__init__(
            f"Failed to delete {len(self.failed_ids)} of {total} memos"
        )
