"""FastAPI dependencies for services wired up in the app lifespan.

## Usage

```python
from fastapi import Depends
from task_weather.api.dependencies import get_task_service

@router.get("/tasks")
async def list_tasks(tasks: TaskService = Depends(get_task_service)):
    ...
```
"""

from __future__ import annotations

from fastapi import Request

from task_weather.database.store import TaskStore
from task_weather.services.tasks import TaskService
from task_weather.services.weather import WeatherLookup


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.store


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_weather_lookup(request: Request) -> WeatherLookup:
    return request.app.state.weather_lookup
