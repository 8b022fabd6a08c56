"""In-memory memo collection backed by a MemoRepository."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID

from memopad.domain.entities.memo import Memo, MemoForm, create_memo
from memopad.domain.exceptions import PartialDeletionError, PersistenceError
from memopad.domain.repositories.memo_repository import MemoRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoStore:
    """メモコレクションの所有者

    全メモを作成日時降順で保持し、CRUD 操作はリポジトリでの成功を
    確認してからメモリ上のコレクションに反映する。
    失敗した操作はコレクションを変更しない（clear_all を除く）。
    """

    def __init__(
        self,
        repository: MemoRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """初期化

        Args:
            repository: メモリポジトリ
            clock: 作成・更新日時に使う現在時刻関数
        """
        self._repository = repository
        self._clock = clock
        self._memos: list[Memo] = []
        self._loading = False
        self._error: str | None = None

    @property
    def memos(self) -> tuple[Memo, ...]:
        """現在のコレクション（作成日時降順）"""
        return tuple(self._memos)

    @property
    def loading(self) -> bool:
        """load_all 実行中かどうか"""
        return self._loading

    @property
    def error(self) -> str | None:
        """直近の失敗のメッセージ"""
        return self._error

    def clear_error(self) -> None:
        """エラー状態をクリアする"""
        self._error = None

    def get_by_id(self, memo_id: UUID) -> Memo | None:
        """コレクションから ID でメモを取得する

        Args:
            memo_id: メモの ID

        Returns:
            見つかったメモ、または None
        """
        return next((memo for memo in self._memos if memo.id == memo_id), None)

    async def fetch(self, memo_id: UUID) -> Memo | None:
        """ID でメモを取得する

        コレクションにない場合はリポジトリに問い合わせる（load_all が
        失敗していた場合など）。取得したメモはコレクションに追加しない。

        Raises:
            PersistenceError: 取得に失敗した場合
        """
        memo = self.get_by_id(memo_id)
        if memo is not None:
            return memo
        try:
            return await self._repository.find_by_id(memo_id)
        except PersistenceError as e:
            logger.exception("Failed to fetch memo %s", memo_id)
            self._error = f"Failed to fetch memo: {e}"
            raise

    async def load_all(self) -> None:
        """リポジトリから全メモを読み込む

        失敗した場合は error を設定し、既存のコレクションはそのまま残す。
        """
        self._loading = True
        self._error = None
        try:
            memos = await self._repository.list_all()
        except PersistenceError as e:
            logger.exception("Failed to load memos")
            self._error = f"Failed to load memos: {e}"
            return
        finally:
            self._loading = False

        self._memos = list(memos)
        logger.info("Loaded %d memos", len(self._memos))

    async def create(self, form: MemoForm) -> Memo:
        """メモを作成し、コレクションの先頭に追加する

        Args:
            form: 入力値

        Returns:
            リポジトリが返した作成済みメモ

        Raises:
            ValidationError: タイトルまたは本文が空の場合
            PersistenceError: 保存に失敗した場合
        """
        memo = create_memo(form, now=self._clock())
        try:
            created = await self._repository.insert(memo)
        except PersistenceError as e:
            logger.exception("Failed to create memo")
            self._error = f"Failed to create memo: {e}"
            raise

        self._memos.insert(0, created)
        logger.info("Created memo %s", created.id)
        return created

    async def update(self, memo_id: UUID, form: MemoForm) -> Memo:
        """メモを更新し、コレクション内の同じ ID のメモを置き換える

        Args:
            memo_id: 更新するメモの ID
            form: 新しい入力値

        Returns:
            リポジトリが返した更新済みメモ

        Raises:
            ValidationError: タイトルまたは本文が空の場合
            NotFoundError: メモが存在しない場合
            PersistenceError: 更新に失敗した場合
        """
        form.validate()
        try:
            updated = await self._repository.update(memo_id, form, self._clock())
        except PersistenceError as e:
            logger.exception("Failed to update memo %s", memo_id)
            self._error = f"Failed to update memo: {e}"
            raise

        self._memos = [updated if memo.id == memo_id else memo for memo in self._memos]
        logger.info("Updated memo %s", memo_id)
        return updated

    async def delete(self, memo_id: UUID) -> None:
        """メモを削除する

        リポジトリでの削除が完了してからコレクションから取り除く。

        Args:
            memo_id: 削除するメモの ID

        Raises:
            PersistenceError: 削除に失敗した場合
        """
        try:
            deleted = await self._repository.delete(memo_id)
        except PersistenceError as e:
            logger.exception("Failed to delete memo %s", memo_id)
            self._error = f"Failed to delete memo: {e}"
            raise

        if not deleted:
            logger.warning("Memo %s was already absent from the repository", memo_id)
        self._remove(memo_id)
        logger.info("Deleted memo %s", memo_id)

    async def clear_all(self) -> None:
        """全メモを並行して削除する

        削除はすべて同時に開始し、全ての結果を待つ。成功した削除は
        完了した時点でコレクションに反映され、一部が失敗しても
        ロールバックはしない。

        Raises:
            PartialDeletionError: 1 件以上の削除に失敗した場合
        """
        targets = [memo.id for memo in self._memos]
        if not targets:
            return

        async def delete_one(memo_id: UUID) -> None:
            await self._repository.delete(memo_id)
            self._remove(memo_id)

        results = await asyncio.gather(
            *(delete_one(memo_id) for memo_id in targets),
            return_exceptions=True,
        )

        failures: list[tuple[UUID, PersistenceError]] = []
        for memo_id, result in zip(targets, results):
            if isinstance(result, PersistenceError):
                failures.append((memo_id, result))
            elif isinstance(result, BaseException):
                raise result

        if failures:
            error = PartialDeletionError([memo_id for memo_id, _ in failures], len(targets))
            logger.error("%s: %s", error, failures[0][1])
            self._error = str(error)
            raise error from failures[0][1]

        logger.info("Cleared %d memos", len(targets))

    def _remove(self, memo_id: UUID) -> None:
        self._memos = [memo for memo in self._memos if memo.id != memo_id]
