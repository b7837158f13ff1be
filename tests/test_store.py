"""Tests for the task store."""

from datetime import datetime, timezone

import pytest

from task_weather.config import Settings
from task_weather.database.store import StoreUnavailable, TaskStore, _as_utc


class TestReadiness:
    """Tests for connection and readiness handling."""

    def test_new_store_is_not_ready(self, settings: Settings):
        """Test that a store is not ready before connect()."""
        assert TaskStore(settings).is_ready() is False

    @pytest.mark.asyncio
    async def test_connect_and_close(self, settings: Settings):
        """Test the connect/close lifecycle."""
        store = TaskStore(settings)
        assert await store.connect() is True
        assert store.is_ready() is True

        await store.close()
        assert store.is_ready() is False

    @pytest.mark.asyncio
    async def test_close_without_connect(self, settings: Settings):
        """Test that closing an unconnected store is harmless."""
        await TaskStore(settings).close()

    @pytest.mark.asyncio
    async def test_unreachable_database_leaves_store_not_ready(self, tmp_path):
        """Test that connect() fails soft when the database cannot be opened."""
        settings = Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'tasks.db'}",
            database_connect_attempts=1,
        )
        store = TaskStore(settings)

        assert await store.connect() is False
        assert store.is_ready() is False
        await store.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: s.find_all(),
            lambda s: s.find_by_id("00000000-0000-0000-0000-000000000000"),
            lambda s: s.delete_by_id("00000000-0000-0000-0000-000000000000"),
        ],
    )
    async def test_operations_fail_fast_when_not_ready(self, settings: Settings, operation):
        """Test that operations raise StoreUnavailable instead of hanging."""
        with pytest.raises(StoreUnavailable):
            await operation(TaskStore(settings))


class TestRecords:
    """Tests for inserting and reading records."""

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, store: TaskStore):
        """Test that insert returns a task with a fresh id."""
        first = await store.insert(
            activity="Swim",
            city="Nice",
            state=None,
            country="FR",
            task_date=datetime(2024, 8, 1, tzinfo=timezone.utc),
            task_time=None,
        )
        second = await store.insert(
            activity="Swim",
            city="Nice",
            state=None,
            country="FR",
            task_date=datetime(2024, 8, 1, tzinfo=timezone.utc),
            task_time=None,
        )
        assert first.id and second.id
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_round_trip_keeps_utc(self, store: TaskStore):
        """Test that dates read back are UTC-aware and unchanged."""
        when = datetime(2024, 8, 1, 16, 45, tzinfo=timezone.utc)
        created = await store.insert(
            activity="Sail",
            city="Kiel",
            state="SH",
            country="DE",
            task_date=when,
            task_time="16:45",
        )

        fetched = await store.find_by_id(created.id)
        assert fetched is not None
        assert fetched.task_date == when
        assert fetched.task_date.tzinfo is not None
        assert fetched.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, store: TaskStore):
        """Test that unknown and malformed ids return None."""
        assert await store.find_by_id("00000000-0000-0000-0000-000000000000") is None
        assert await store.find_by_id("12345") is None


class TestAsUtc:
    """Tests for the UTC normalization helper."""

    def test_naive_is_treated_as_utc(self):
        naive = datetime(2024, 1, 1, 12, 0)
        assert _as_utc(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_is_converted(self):
        from datetime import timedelta

        plus_two = timezone(timedelta(hours=2))
        value = datetime(2024, 1, 1, 14, 0, tzinfo=plus_two)
        assert _as_utc(value) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert _as_utc(value).tzinfo == timezone.utc
