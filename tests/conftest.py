"""Pytest fixtures for task weather tests.

This module provides test fixtures that ensure:
1. No external API calls are made (the weather provider uses a mock transport)
2. Databases are in-memory SQLite, fresh for each test
3. Isolated test environment with controlled configuration
"""

import os
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_CONNECT_ATTEMPTS", "1")
os.environ.setdefault("ENVIRONMENT", "development")

from task_weather.config import Settings
from task_weather.database.store import TaskStore
from task_weather.models.task import Task, TaskCreate
from task_weather.providers.openweather import OpenWeatherProvider
from task_weather.services.tasks import TaskService


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from task_weather.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at an in-memory database and a fake API key."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        database_connect_attempts=1,
        openweather_api_key="test-api-key",
        weather_timeout_seconds=2.0,
    )


@pytest.fixture
async def store(settings: Settings):
    """Connected task store backed by a fresh in-memory database."""
    task_store = TaskStore(settings)
    assert await task_store.connect() is True
    yield task_store
    await task_store.close()


@pytest.fixture
def task_service(store: TaskStore) -> TaskService:
    return TaskService(store)


# =============================================================================
# Weather Fixtures
# =============================================================================


@pytest.fixture
def openweather_payload() -> dict[str, Any]:
    """Typical OpenWeatherMap current weather response (imperial units)."""
    return {
        "coord": {"lon": -104.9847, "lat": 39.7392},
        "weather": [
            {"id": 802, "main": "Clouds", "description": "scattered clouds", "icon": "03d"}
        ],
        "main": {
            "temp": 71.5,
            "feels_like": 70.4,
            "temp_min": 68.0,
            "temp_max": 74.1,
            "pressure": 1012,
            "humidity": 40,
        },
        "wind": {"speed": 5.75, "deg": 250},
        "clouds": {"all": 40},
        "name": "Denver",
        "cod": 200,
    }


@pytest.fixture
def make_provider() -> Callable[..., OpenWeatherProvider]:
    """Build an OpenWeatherMap provider whose requests go to `handler`."""

    def _make(handler, api_key: str | None = "test-api-key", timeout: float = 2.0):
        return OpenWeatherProvider(
            api_key=api_key,
            timeout=timeout,
            transport=httpx.MockTransport(handler),
        )

    return _make


# =============================================================================
# Task Fixtures
# =============================================================================


@pytest.fixture
def sample_task_input() -> TaskCreate:
    return TaskCreate(
        activity="Morning hike",
        city="Denver",
        state="CO",
        country="US",
        task_date="2024-03-01",
        task_time="07:30",
    )


@pytest.fixture
def sample_task() -> Task:
    """A stored-looking task without touching the database."""
    return Task(
        id="5f0c6a1e-2b7c-4f65-9a35-1c2d3e4f5a6b",
        activity="Morning hike",
        city="Denver",
        state="CO",
        country="US",
        task_date=datetime(2024, 3, 1, 7, 30, tzinfo=timezone.utc),
        task_time="07:30",
        created_at=datetime(2024, 2, 20, 12, 0, tzinfo=timezone.utc),
    )
