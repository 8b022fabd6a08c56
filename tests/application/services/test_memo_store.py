"""Tests for MemoStore."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock
from uuid import UUID, uuid4

import pytest

from memopad.application.services.memo_store import MemoStore
from memopad.domain.entities.memo import Memo, MemoCategory, MemoForm
from memopad.domain.exceptions import (
    NotFoundError,
    PartialDeletionError,
    PersistenceError,
    ValidationError,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """呼び出しごとに 1 秒進む時計"""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self._now = start

    def __call__(self) -> datetime:
        current = self._now
        self._now += timedelta(seconds=1)
        return current


class InMemoryMemoRepository:
    """テスト用のメモリ上リポジトリ"""

    def __init__(self) -> None:
        self.rows: dict[UUID, Memo] = {}
        self.fail_ids: set[UUID] = set()

    async def list_all(self) -> list[Memo]:
        return sorted(self.rows.values(), key=lambda m: m.created_at, reverse=True)

    async def insert(self, memo: Memo) -> Memo:
        self.rows[memo.id] = memo
        return memo

    async def update(self, memo_id: UUID, form: MemoForm, updated_at: datetime) -> Memo:
        if memo_id not in self.rows:
            raise NotFoundError(memo_id)
        current = self.rows[memo_id]
        updated = Memo(
            id=memo_id,
            title=form.title,
            content=form.content,
            category=form.category,
            tags=list(form.tags),
            created_at=current.created_at,
            updated_at=updated_at,
        )
        self.rows[memo_id] = updated
        return updated

    async def delete(self, memo_id: UUID) -> bool:
        await asyncio.sleep(0)
        if memo_id in self.fail_ids:
            raise PersistenceError(f"cannot delete {memo_id}")
        return self.rows.pop(memo_id, None) is not None

    async def find_by_id(self, memo_id: UUID) -> Memo | None:
        return self.rows.get(memo_id)


def create_test_memo(title: str = "T", offset: int = 0) -> Memo:
    created_at = BASE_TIME + timedelta(minutes=offset)
    return Memo(
        id=uuid4(),
        title=title,
        content="C",
        category=MemoCategory.PERSONAL,
        tags=[],
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def mock_repository() -> Mock:
    """Create mock memo repository."""
    repo = Mock()
    repo.list_all = AsyncMock(return_value=[])
    repo.insert = AsyncMock(side_effect=lambda memo: memo)
    repo.update = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def repository() -> InMemoryMemoRepository:
    return InMemoryMemoRepository()


@pytest.fixture
def store(repository: InMemoryMemoRepository) -> MemoStore:
    return MemoStore(repository, clock=FakeClock())


class TestLoadAll:
    """load_all method tests."""

    async def test_loads_in_repository_order(self, mock_repository: Mock) -> None:
        memos = [create_test_memo("new", 2), create_test_memo("old", 1)]
        mock_repository.list_all.return_value = memos
        store = MemoStore(mock_repository)

        await store.load_all()

        assert list(store.memos) == memos
        assert store.error is None
        assert store.loading is False

    async def test_failure_sets_error_and_keeps_collection(
        self, mock_repository: Mock
    ) -> None:
        loaded = [create_test_memo()]
        mock_repository.list_all.return_value = loaded
        store = MemoStore(mock_repository)
        await store.load_all()

        mock_repository.list_all.side_effect = PersistenceError("connection lost")
        await store.load_all()

        assert list(store.memos) == loaded
        assert store.error is not None
        assert "connection lost" in store.error
        assert store.loading is False

    async def test_clear_error(self, mock_repository: Mock) -> None:
        mock_repository.list_all.side_effect = PersistenceError("boom")
        store = MemoStore(mock_repository)
        await store.load_all()

        store.clear_error()

        assert store.error is None

    async def test_loading_is_true_while_in_flight(self, mock_repository: Mock) -> None:
        release = asyncio.Event()
        observed: list[bool] = []
        store = MemoStore(mock_repository)

        async def slow_list_all() -> list[Memo]:
            observed.append(store.loading)
            await release.wait()
            return []

        mock_repository.list_all = AsyncMock(side_effect=slow_list_all)

        task = asyncio.create_task(store.load_all())
        await asyncio.sleep(0)
        assert store.loading is True

        release.set()
        await task

        assert observed == [True]
        assert store.loading is False


class TestFetch:
    """fetch method tests."""

    async def test_returns_collection_memo_without_repository_call(
        self, mock_repository: Mock
    ) -> None:
        memo = create_test_memo()
        mock_repository.list_all.return_value = [memo]
        mock_repository.find_by_id = AsyncMock()
        store = MemoStore(mock_repository)
        await store.load_all()

        assert await store.fetch(memo.id) == memo
        mock_repository.find_by_id.assert_not_called()

    async def test_falls_back_to_repository(self, mock_repository: Mock) -> None:
        memo = create_test_memo()
        mock_repository.find_by_id = AsyncMock(return_value=memo)
        store = MemoStore(mock_repository)

        assert await store.fetch(memo.id) == memo
        mock_repository.find_by_id.assert_awaited_once_with(memo.id)
        assert store.memos == ()

    async def test_missing_returns_none(self, store: MemoStore) -> None:
        assert await store.fetch(uuid4()) is None

    async def test_failure_sets_error(self, mock_repository: Mock) -> None:
        mock_repository.find_by_id = AsyncMock(side_effect=PersistenceError("down"))
        store = MemoStore(mock_repository)

        with pytest.raises(PersistenceError):
            await store.fetch(uuid4())

        assert store.error is not None


class TestCreate:
    """create method tests."""

    async def test_create_prepends(self, store: MemoStore) -> None:
        first = await store.create(MemoForm(title="first", content="C"))
        second = await store.create(MemoForm(title="second", content="C"))

        assert [memo.id for memo in store.memos] == [second.id, first.id]

    async def test_create_scenario_timestamps_and_fields(self, store: MemoStore) -> None:
        memo = await store.create(
            MemoForm(title="T", content="C", category=MemoCategory.WORK, tags=[])
        )

        assert memo.created_at == memo.updated_at
        assert memo.category == MemoCategory.WORK
        assert memo.tags == []

    async def test_create_returns_repository_record(self, mock_repository: Mock) -> None:
        canonical = create_test_memo("canonical")
        mock_repository.insert = AsyncMock(return_value=canonical)
        store = MemoStore(mock_repository)

        result = await store.create(MemoForm(title="T", content="C"))

        assert result is canonical
        assert store.memos == (canonical,)

    async def test_create_failure_leaves_collection(self, mock_repository: Mock) -> None:
        mock_repository.insert.side_effect = PersistenceError("rejected")
        store = MemoStore(mock_repository)

        with pytest.raises(PersistenceError):
            await store.create(MemoForm(title="T", content="C"))

        assert store.memos == ()
        assert store.error is not None

    async def test_create_validation_happens_before_gateway(
        self, mock_repository: Mock
    ) -> None:
        store = MemoStore(mock_repository)

        with pytest.raises(ValidationError):
            await store.create(MemoForm(title="", content="C"))

        mock_repository.insert.assert_not_called()


class TestUpdate:
    """update method tests."""

    async def test_update_scenario(self, store: MemoStore) -> None:
        created = await store.create(
            MemoForm(title="T", content="C", category=MemoCategory.WORK, tags=[])
        )

        updated = await store.update(
            created.id,
            MemoForm(title="T", content="C", category=MemoCategory.WORK, tags=["x"]),
        )

        assert updated.updated_at > updated.created_at
        assert updated.created_at == created.created_at
        assert updated.tags == ["x"]
        assert store.get_by_id(created.id) == updated

    async def test_update_keeps_position(self, store: MemoStore) -> None:
        a = await store.create(MemoForm(title="a", content="C"))
        b = await store.create(MemoForm(title="b", content="C"))

        await store.update(a.id, MemoForm(title="a2", content="C"))

        assert [memo.title for memo in store.memos] == ["b", "a2"]
        assert store.memos[0].id == b.id

    async def test_update_not_found(self, store: MemoStore) -> None:
        existing = await store.create(MemoForm(title="a", content="C"))

        with pytest.raises(NotFoundError):
            await store.update(uuid4(), MemoForm(title="x", content="C"))

        assert store.memos == (existing,)

    async def test_update_failure_leaves_collection(self, mock_repository: Mock) -> None:
        memo = create_test_memo()
        mock_repository.list_all.return_value = [memo]
        mock_repository.update.side_effect = PersistenceError("rejected")
        store = MemoStore(mock_repository)
        await store.load_all()

        with pytest.raises(PersistenceError):
            await store.update(memo.id, MemoForm(title="new", content="C"))

        assert store.memos == (memo,)
        assert store.error is not None

    async def test_update_validation_happens_before_gateway(
        self, mock_repository: Mock
    ) -> None:
        store = MemoStore(mock_repository)

        with pytest.raises(ValidationError):
            await store.update(uuid4(), MemoForm(title="T", content=" "))

        mock_repository.update.assert_not_called()


class TestDelete:
    """delete method tests."""

    async def test_delete_removes(self, store: MemoStore) -> None:
        a = await store.create(MemoForm(title="a", content="C"))
        b = await store.create(MemoForm(title="b", content="C"))

        await store.delete(a.id)

        assert store.memos == (b,)
        assert store.get_by_id(a.id) is None

    async def test_delete_failure_leaves_collection(self, mock_repository: Mock) -> None:
        memo = create_test_memo()
        mock_repository.list_all.return_value = [memo]
        mock_repository.delete.side_effect = PersistenceError("offline")
        store = MemoStore(mock_repository)
        await store.load_all()

        with pytest.raises(PersistenceError):
            await store.delete(memo.id)

        assert store.memos == (memo,)

    async def test_delete_missing_remote_record_still_removes_locally(
        self, mock_repository: Mock
    ) -> None:
        memo = create_test_memo()
        mock_repository.list_all.return_value = [memo]
        mock_repository.delete.return_value = False
        store = MemoStore(mock_repository)
        await store.load_all()

        await store.delete(memo.id)

        assert store.memos == ()


class TestClearAll:
    """clear_all method tests."""

    async def test_clear_all(self, store: MemoStore, repository: InMemoryMemoRepository) -> None:
        for i in range(3):
            await store.create(MemoForm(title=f"m{i}", content="C"))

        await store.clear_all()

        assert store.memos == ()
        assert repository.rows == {}

    async def test_clear_all_empty(self, mock_repository: Mock) -> None:
        store = MemoStore(mock_repository)

        await store.clear_all()

        mock_repository.delete.assert_not_called()

    async def test_deletes_are_issued_concurrently(self, mock_repository: Mock) -> None:
        memos = [create_test_memo(f"m{i}", i) for i in range(3)]
        mock_repository.list_all.return_value = memos
        started: list[UUID] = []
        release = asyncio.Event()

        async def slow_delete(memo_id: UUID) -> bool:
            started.append(memo_id)
            if len(started) == len(memos):
                release.set()
            await release.wait()
            return True

        mock_repository.delete = AsyncMock(side_effect=slow_delete)
        store = MemoStore(mock_repository)
        await store.load_all()

        await asyncio.wait_for(store.clear_all(), timeout=1)

        assert set(started) == {memo.id for memo in memos}
        assert store.memos == ()

    async def test_partial_failure_keeps_successful_removals(
        self, store: MemoStore, repository: InMemoryMemoRepository
    ) -> None:
        a = await store.create(MemoForm(title="a", content="C"))
        b = await store.create(MemoForm(title="b", content="C"))
        c = await store.create(MemoForm(title="c", content="C"))
        repository.fail_ids = {b.id}

        with pytest.raises(PartialDeletionError) as exc_info:
            await store.clear_all()

        assert exc_info.value.failed_ids == [b.id]
        assert exc_info.value.total == 3
        assert [memo.id for memo in store.memos] == [b.id]
        assert set(repository.rows) == {b.id}
        assert store.error is not None
        assert a.id not in repository.rows and c.id not in repository.rows


class TestConsistency:
    """Collection membership follows successful operations only."""

    async def test_membership_matches_repository(
        self, store: MemoStore, repository: InMemoryMemoRepository
    ) -> None:
        a = await store.create(MemoForm(title="a", content="C"))
        b = await store.create(MemoForm(title="b", content="C"))
        await store.update(a.id, MemoForm(title="a2", content="C", tags=["t"]))
        repository.fail_ids = {b.id}
        with pytest.raises(PersistenceError):
            await store.delete(b.id)
        c = await store.create(MemoForm(title="c", content="C"))
        await store.delete(a.id)

        assert {memo.id for memo in store.memos} == set(repository.rows) == {b.id, c.id}

    async def test_create_then_load_all_round_trips(
        self, store: MemoStore, repository: InMemoryMemoRepository
    ) -> None:
        created = await store.create(
            MemoForm(title="T", content="# C", category=MemoCategory.IDEA, tags=["a", "b"])
        )

        fresh = MemoStore(repository)
        await fresh.load_all()

        assert fresh.get_by_id(created.id) == created
