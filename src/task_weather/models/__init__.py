"""Domain models for task weather."""

from task_weather.models.task import ALL_DAY, Task, TaskCreate
from task_weather.models.weather import (
    CurrentConditions,
    TaskSummary,
    WeatherResult,
    WeatherView,
)

__all__ = [
    # Task
    "ALL_DAY",
    "Task",
    "TaskCreate",
    # Weather
    "CurrentConditions",
    "TaskSummary",
    "WeatherResult",
    "WeatherView",
]
