"""Weather view models.

These are the display-ready structures returned by the weather lookup. Units
follow the provider request (imperial by default: Fahrenheit and mph).
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field

from task_weather.models.task import Task


class CurrentConditions(BaseModel):
    """Provider-neutral current conditions.

    Values are in the units the provider was asked for and are not rounded.
    """

    location_name: str
    temperature: float
    feels_like: float
    humidity_percent: float | int | None = None
    description: str
    icon_url: str
    wind_speed: float | int | None = None
    cloud_cover_percent: float | int | None = None


class TaskSummary(BaseModel):
    """Display projection of a task shown next to its weather."""

    activity: str
    date: str
    time: str
    location: str

    @classmethod
    def from_task(cls, task: Task) -> Self:
        return cls(
            activity=task.activity,
            date=task.display_date,
            time=task.display_time,
            location=task.display_location,
        )


class WeatherView(BaseModel):
    """Current conditions for a task's location."""

    location: str = Field(..., description="Provider-resolved place name")
    temp: int
    feels_like: int
    humidity: float | int | None = Field(default=None, description="Percent")
    description: str
    icon: str = Field(..., description="Fully-qualified icon URL")
    wind: float | int | None = None
    clouds: float | int | None = Field(default=None, description="Cloud cover percent")
    task: TaskSummary


class WeatherResult(BaseModel):
    """Outcome of a single weather lookup.

    Callers check `success` rather than an HTTP status to detect failures.
    """

    success: bool
    error: str | None = None
    weather: WeatherView | None = None

    @classmethod
    def ok(cls, weather: WeatherView) -> Self:
        return cls(success=True, weather=weather)

    @classmethod
    def failed(cls, error: str) -> Self:
        return cls(success=False, error=error)

    def to_response(self) -> dict[str, Any]:
        """Flatten into the JSON body returned by the weather endpoint."""
        if self.success and self.weather is not None:
            return {"success": True, **self.weather.model_dump()}
        return {"success": False, "error": self.error}
