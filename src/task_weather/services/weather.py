"""Weather lookup for tasks.

Fetches current conditions for a task's city and country and shapes them
into a `WeatherView`. Failures never propagate: every outcome is returned as
a `WeatherResult` whose `success` flag tells the caller what happened.

## Failure Messages

| Failure                         | Message                                                        |
|---------------------------------|----------------------------------------------------------------|
| store not connected             | Database not available                                         |
| unknown task id                 | Task not found                                                 |
| API key missing                 | Weather service configuration error                            |
| timeout                         | Weather request timed out. Please try again.                   |
| HTTP 404                        | Location not found. Please check the city and country.         |
| HTTP 401                        | Weather service authentication failed.                         |
| HTTP 429                        | Too many weather requests. Please wait a moment.               |
| other HTTP status               | Weather service error: {status}                                |
| no response                     | No response from weather service. Please check your connection.|
| anything else                   | Could not fetch weather data for this location                 |

Store and task lookups happen before any network call.
"""

from __future__ import annotations

import logging
import math

from task_weather.database.store import StoreError, StoreUnavailable
from task_weather.models.task import Task
from task_weather.models.weather import TaskSummary, WeatherResult, WeatherView
from task_weather.providers.base import ProviderError, ProviderErrorKind, WeatherProvider
from task_weather.services.tasks import TaskNotFound, TaskService

logger = logging.getLogger(__name__)

MSG_DATABASE_UNAVAILABLE = "Database not available"
MSG_TASK_NOT_FOUND = "Task not found"
MSG_CONFIG = "Weather service configuration error"
MSG_TIMEOUT = "Weather request timed out. Please try again."
MSG_NOT_FOUND = "Location not found. Please check the city and country."
MSG_UNAUTHORIZED = "Weather service authentication failed."
MSG_RATE_LIMITED = "Too many weather requests. Please wait a moment."
MSG_NO_RESPONSE = "No response from weather service. Please check your connection."
MSG_GENERIC = "Could not fetch weather data for this location"

STATUS_MESSAGES: dict[int, str] = {
    404: MSG_NOT_FOUND,
    401: MSG_UNAUTHORIZED,
    429: MSG_RATE_LIMITED,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def error_message(error: ProviderError) -> str:
    """Map a provider failure to the message shown to the user."""
    if error.kind is ProviderErrorKind.CONFIG:
        return MSG_CONFIG
    if error.kind is ProviderErrorKind.TIMEOUT:
        return MSG_TIMEOUT
    if error.kind is ProviderErrorKind.STATUS:
        return STATUS_MESSAGES.get(
            error.status_code, f"Weather service error: {error.status_code}"
        )
    if error.kind is ProviderErrorKind.NO_RESPONSE:
        return MSG_NO_RESPONSE
    return MSG_GENERIC


class WeatherLookup:
    """Current weather for tasks.

    Every call is a fresh request: nothing is cached and nothing is retried.
    """

    def __init__(self, provider: WeatherProvider, tasks: TaskService):
        self.provider = provider
        self.tasks = tasks

    async def fetch_for_task_id(self, task_id: str) -> WeatherResult:
        """Resolve the task, then fetch its weather."""
        try:
            task = await self.tasks.get_by_id(task_id)
        except StoreUnavailable:
            return WeatherResult.failed(MSG_DATABASE_UNAVAILABLE)
        except TaskNotFound:
            return WeatherResult.failed(MSG_TASK_NOT_FOUND)
        except StoreError as e:
            logger.error(f"Error loading task {task_id}: {e}")
            return WeatherResult.failed(MSG_GENERIC)

        return await self.fetch_for_task(task)

    async def fetch_for_task(self, task: Task) -> WeatherResult:
        """Fetch current conditions for an existing task."""
        try:
            conditions = await self.provider.get_current(task.location_query)
        except ProviderError as e:
            if e.kind is ProviderErrorKind.CONFIG:
                logger.error(f"{e.provider} API key not found")
            else:
                logger.error(f"Weather API Error: {e}")
                if e.response_body:
                    logger.debug(f"Weather API response body: {e.response_body}")
            return WeatherResult.failed(error_message(e))

        return WeatherResult.ok(
            WeatherView(
                location=conditions.location_name,
                temp=round_half_up(conditions.temperature),
                feels_like=round_half_up(conditions.feels_like),
                humidity=conditions.humidity_percent,
                description=conditions.description,
                icon=conditions.icon_url,
                wind=conditions.wind_speed,
                clouds=conditions.cloud_cover_percent,
                task=TaskSummary.from_task(task),
            )
        )
