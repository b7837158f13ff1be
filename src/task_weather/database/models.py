"""Database models for task weather.

## Schema Overview

```
tasks
  id           UUID, primary key
  activity     text, required
  city         text, required
  state        text, optional
  country      text, required
  task_date    timestamp (UTC), required, indexed
  task_time    text, optional (HH:MM as entered)
  created_at   timestamp (UTC), set on insert
```
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class TaskRecord(Base):
    """Stored task row.

    Rows are written once and never updated; the service layer converts them
    into `task_weather.models.Task` before handing them to callers.
    """

    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    activity: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str | None] = mapped_column(String(255))
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    task_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    task_time: Mapped[str | None] = mapped_column(String(16))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (Index("ix_tasks_task_date", "task_date"),)

    def __repr__(self) -> str:
        return f"<TaskRecord {self.id} {self.activity!r}>"
