"""FastAPI application factory.

Creates and configures the FastAPI application with all routes, templates
and error pages.

## Usage

```python
from task_weather.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3000)
```

## Configuration

The app is configured via environment variables. See `task_weather.config`
for available settings. Tests can pass `settings`, `store` and `provider`
explicitly.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_weather.api.dependencies import get_task_store
from task_weather.api.templating import templates
from task_weather.config import Settings, get_settings
from task_weather.database.store import TaskStore
from task_weather.providers.base import WeatherProvider
from task_weather.providers.openweather import OpenWeatherProvider
from task_weather.services.tasks import TaskService
from task_weather.services.weather import WeatherLookup

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("task_weather").setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown tasks:
    - Connect the task store (the app still starts if the database is down)
    - Wire the task service and weather lookup onto `app.state`
    - Close the store and HTTP client on shutdown
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    store: TaskStore = app.state.store
    await store.connect()

    provider: WeatherProvider = app.state.weather_provider
    task_service = TaskService(store)
    app.state.task_service = task_service
    app.state.weather_lookup = WeatherLookup(provider, task_service)
    app.state.started_at = time.monotonic()

    yield

    # Shutdown
    logger.info("Shutting down")
    await provider.aclose()
    await store.close()


def create_app(
    settings: Settings | None = None,
    store: TaskStore | None = None,
    provider: WeatherProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (defaults to environment settings)
        store: Task store (defaults to one built from settings)
        provider: Weather provider (defaults to OpenWeatherMap from settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Tasks with current weather for their location",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or TaskStore(settings)
    app.state.weather_provider = provider or OpenWeatherProvider.from_settings(settings)
    app.state.started_at = time.monotonic()

    # Include routers
    from task_weather.api.routes import pages, weather

    app.include_router(pages.router, tags=["Pages"])
    app.include_router(weather.router, prefix="/weather", tags=["Weather"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check(request: Request, store: TaskStore = Depends(get_task_store)):
        """Liveness probe with database connectivity and uptime."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "database": "connected" if store.is_ready() else "disconnected",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    @app.exception_handler(StarletteHTTPException)
    async def not_found_page(request: Request, exc: StarletteHTTPException):
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "title": "Page Not Found",
                "message": "The page you are looking for does not exist.",
            },
            status_code=404,
        )

    @app.exception_handler(Exception)
    async def server_error_page(request: Request, exc: Exception):
        logger.exception(f"Server Error: {exc}")
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "title": "Server Error",
                "message": "Something went wrong on our end. Please try again later.",
            },
            status_code=500,
        )

    return app
