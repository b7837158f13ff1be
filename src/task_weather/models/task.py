"""Task models.

A task is a user-recorded activity at a place and time. Tasks are created
once and never edited; the only mutations are create and delete.

## Date Handling

The date and optional time entered by the user are combined into a single
canonical UTC instant (`task_date`). When no time is given the instant is UTC
midnight of that day. The raw time text is kept separately in `task_time` so
pages can show "All day" for untimed tasks.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

ALL_DAY = "All day"


class TaskCreate(BaseModel):
    """Raw task input as submitted by the add-task form.

    Values are kept as entered; parsing and validation happen in the task
    service so that the form can be re-rendered with what the user typed.
    """

    activity: str = ""
    city: str = ""
    state: str | None = None
    country: str = ""
    task_date: str = Field(default="", description="Date as YYYY-MM-DD")
    task_time: str | None = Field(default=None, description="Optional time as HH:MM")


class Task(BaseModel):
    """A persisted task."""

    id: str
    activity: str
    city: str
    state: str | None = None
    country: str
    task_date: datetime = Field(..., description="Canonical UTC instant")
    task_time: str | None = None
    created_at: datetime

    @property
    def location_query(self) -> str:
        """Location string sent to the weather provider.

        The state is display-only and is not part of the query.
        """
        return f"{self.city},{self.country}"

    @property
    def display_location(self) -> str:
        """Human-readable location, e.g. 'Austin, TX, US'."""
        if self.state:
            return f"{self.city}, {self.state}, {self.country}"
        return f"{self.city}, {self.country}"

    @property
    def display_date(self) -> str:
        """Weekday and date, e.g. 'Fri, Mar 1, 2024'."""
        d = self.task_date
        return f"{d:%a}, {d:%b} {d.day}, {d.year}"

    @property
    def display_time(self) -> str:
        """Time as entered, or 'All day' for untimed tasks."""
        return self.task_time or ALL_DAY
