"""Weather routes.

`GET /weather/{task_id}` always answers 200 with a JSON body; callers check
the `success` flag to detect failures.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from task_weather.api.dependencies import get_weather_lookup
from task_weather.services.weather import WeatherLookup

router = APIRouter()


@router.get("/{task_id}")
async def get_task_weather(
    task_id: str,
    lookup: WeatherLookup = Depends(get_weather_lookup),
) -> dict[str, Any]:
    """Current weather for a task's city and country."""
    result = await lookup.fetch_for_task_id(task_id)
    return result.to_response()
