"""Application services.

- `TaskService`: validation, date normalization and persistence of tasks
- `WeatherLookup`: current weather for a task with user-facing failures
"""

from task_weather.services.tasks import (
    TaskNotFound,
    TaskService,
    TaskValidationError,
    parse_task_date,
)
from task_weather.services.weather import WeatherLookup

__all__ = [
    "TaskService",
    "TaskNotFound",
    "TaskValidationError",
    "parse_task_date",
    "WeatherLookup",
]
