"""Task store backed by an async SQLAlchemy engine.

The store is an explicit client object: it is constructed once at startup
with the application settings, connected in the app lifespan, and injected
into the services that need it.

## Readiness

`connect()` verifies the database is reachable and creates the schema. If the
database cannot be reached after the configured number of attempts the store
stays *not ready* and the application keeps running. Every operation checks
readiness first and raises `StoreUnavailable` immediately instead of waiting
on a dead connection.

## Usage

```python
store = TaskStore(get_settings())
await store.connect()

task = await store.insert(
    activity="Hike",
    city="Denver",
    state="CO",
    country="US",
    task_date=datetime(2024, 3, 1, tzinfo=timezone.utc),
    task_time=None,
)
tasks = await store.find_all()
await store.close()
```
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator

from sqlalchemy import delete, select, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from task_weather.config import Settings
from task_weather.database.models import Base, TaskRecord
from task_weather.models.task import Task

logger = logging.getLogger(__name__)


class StoreUnavailable(Exception):
    """Raised when an operation is attempted while the store is not connected."""


class StoreError(Exception):
    """Raised when a query or write fails on a connected store."""


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to datetimes read back from backends without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_id(task_id: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        return None


def _to_task(record: TaskRecord) -> Task:
    return Task(
        id=str(record.id),
        activity=record.activity,
        city=record.city,
        state=record.state,
        country=record.country,
        task_date=_as_utc(record.task_date),
        task_time=record.task_time,
        created_at=_as_utc(record.created_at),
    )


class TaskStore:
    """Persistence for task records.

    Attributes:
        settings: Application settings (connection string, pool sizing)
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._ready = False

    def _create_engine(self) -> AsyncEngine:
        url = make_url(self.settings.database_url)
        options: dict[str, Any] = {
            "echo": self.settings.database_echo,
            "pool_pre_ping": True,  # Verify connections before use
        }
        if url.get_backend_name() == "sqlite":
            # In-memory databases live inside a single connection
            if url.database in (None, "", ":memory:"):
                options["poolclass"] = StaticPool
        else:
            options["pool_size"] = self.settings.database_pool_size
            options["max_overflow"] = self.settings.database_max_overflow
        return create_async_engine(url, **options)

    async def connect(self) -> bool:
        """Connect to the database and create the schema.

        Returns:
            True if the store is ready, False if the application should run
            without a database.
        """
        if self._engine is None:
            self._engine = self._create_engine()
            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

        logger.info("Connecting to database")
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.settings.database_connect_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=5),
                retry=retry_if_exception_type((SQLAlchemyError, OSError)),
                reraise=True,
            ):
                with attempt:
                    async with self._engine.begin() as conn:
                        await conn.execute(text("SELECT 1"))
                        await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database connection error: {e}")
            logger.warning("Starting without database connection")
            self._ready = False
            return False

        self._ready = True
        logger.info("Database connected")
        return True

    async def close(self) -> None:
        """Dispose of the engine. Safe to call when never connected."""
        self._ready = False
        if self._engine is not None:
            logger.info("Closing database connection")
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def is_ready(self) -> bool:
        """Check whether the store is connected and usable."""
        return self._ready and self._session_factory is not None

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, translating driver failures into `StoreError`."""
        if not self.is_ready():
            raise StoreUnavailable("Database not connected")

        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Database operation failed: {e}") from e
        finally:
            await session.close()

    async def insert(
        self,
        *,
        activity: str,
        city: str,
        state: str | None,
        country: str,
        task_date: datetime,
        task_time: str | None,
    ) -> Task:
        """Persist a new task and return it with its assigned id."""
        record = TaskRecord(
            id=uuid.uuid4(),
            activity=activity,
            city=city,
            state=state,
            country=country,
            task_date=task_date,
            task_time=task_time,
            created_at=datetime.now(timezone.utc),
        )
        async with self._session() as session:
            session.add(record)
            await session.commit()
        return _to_task(record)

    async def find_all(self) -> list[Task]:
        """Return all tasks, soonest first."""
        async with self._session() as session:
            result = await session.execute(
                select(TaskRecord).order_by(TaskRecord.task_date.asc())
            )
            return [_to_task(r) for r in result.scalars().all()]

    async def find_by_id(self, task_id: str) -> Task | None:
        """Return the task with the given id, or None if absent.

        Ids that are not valid UUIDs cannot exist and return None.
        """
        uid = _parse_id(task_id)
        if uid is None:
            return None
        async with self._session() as session:
            record = await session.get(TaskRecord, uid)
            return _to_task(record) if record is not None else None

    async def delete_by_id(self, task_id: str) -> bool:
        """Delete the task if present. Returns whether a row was removed."""
        uid = _parse_id(task_id)
        if uid is None:
            return False
        async with self._session() as session:
            result = await session.execute(
                delete(TaskRecord).where(TaskRecord.id == uid)
            )
            await session.commit()
            return result.rowcount > 0
