"""Task service.

Validates task input, normalizes the entered date and optional time into one
canonical UTC instant, and delegates persistence to the `TaskStore`.

## Date Normalization

| taskDate     | taskTime | task_date                   |
|--------------|----------|-----------------------------|
| 2024-03-01   | (none)   | 2024-03-01T00:00:00+00:00   |
| 2024-03-01   | 14:30    | 2024-03-01T14:30:00+00:00   |
| 2024-03-01   | 9        | 2024-03-01T09:00:00+00:00   |
| 2024-13-40   | any      | TaskValidationError         |

Times are interpreted in UTC regardless of the server's local time zone.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from task_weather.database.store import TaskStore
from task_weather.models.task import Task, TaskCreate

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})$")
TIME_PATTERN = re.compile(r"^(?P<hours>\d{1,2})(?::(?P<minutes>\d{1,2}))?$")


class TaskValidationError(ValueError):
    """Raised when task input cannot be turned into a valid task."""


class TaskNotFound(LookupError):
    """Raised when no task exists for the requested id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


def parse_task_date(date_str: str, time_str: str | None = None) -> datetime:
    """Combine a date and optional time into a UTC instant.

    Args:
        date_str: Date as YYYY-MM-DD
        time_str: Optional time as HH:MM (minutes default to 0)

    Returns:
        Timezone-aware UTC datetime

    Raises:
        TaskValidationError: If the date or time is malformed or impossible
    """
    date_match = DATE_PATTERN.match((date_str or "").strip())
    if not date_match:
        raise TaskValidationError(
            f"Invalid date: '{date_str}'. Expected format: YYYY-MM-DD"
        )

    hours = minutes = 0
    if time_str and time_str.strip():
        time_match = TIME_PATTERN.match(time_str.strip())
        if not time_match:
            raise TaskValidationError(
                f"Invalid time: '{time_str}'. Expected format: HH:MM"
            )
        hours = int(time_match.group("hours"))
        minutes = int(time_match.group("minutes") or 0)

    try:
        return datetime(
            int(date_match.group("year")),
            int(date_match.group("month")),
            int(date_match.group("day")),
            hours,
            minutes,
            tzinfo=timezone.utc,
        )
    except ValueError as e:
        raise TaskValidationError(f"Invalid date or time: {e}") from e


def _required(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise TaskValidationError(f"{field} is required")
    return cleaned


class TaskService:
    """Create, list, fetch and delete tasks.

    The service holds no state of its own; every read goes to the store.
    Store failures (`StoreUnavailable`, `StoreError`) propagate unchanged.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    async def create(self, data: TaskCreate) -> Task:
        """Validate input and persist a new task.

        Raises:
            TaskValidationError: If input is invalid (nothing is persisted)
        """
        activity = _required(data.activity, "Activity")
        city = _required(data.city, "City")
        country = _required(data.country, "Country")
        state = (data.state or "").strip() or None
        task_time = (data.task_time or "").strip() or None
        task_date = parse_task_date(data.task_date, task_time)

        task = await self.store.insert(
            activity=activity,
            city=city,
            state=state,
            country=country,
            task_date=task_date,
            task_time=task_time,
        )
        logger.info(f"Created task {task.id} for {task.task_date.isoformat()}")
        return task

    async def list(self) -> list[Task]:
        """All tasks ordered by date, soonest first."""
        return await self.store.find_all()

    async def get_by_id(self, task_id: str) -> Task:
        """Fetch a single task.

        Raises:
            TaskNotFound: If no task has this id
        """
        task = await self.store.find_by_id(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    async def remove(self, task_id: str) -> bool:
        """Delete a task. Deleting a missing task is not an error."""
        removed = await self.store.delete_by_id(task_id)
        if removed:
            logger.info(f"Deleted task {task_id}")
        else:
            logger.debug(f"Delete requested for missing task {task_id}")
        return removed
