"""Command-line interface for task weather."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from task_weather import __version__


async def _weather(task_id: str) -> int:
    """Fetch weather for one task using the configured database and API key."""
    from task_weather.config import get_settings
    from task_weather.database.store import TaskStore
    from task_weather.providers.openweather import OpenWeatherProvider
    from task_weather.services.tasks import TaskService
    from task_weather.services.weather import WeatherLookup

    settings = get_settings()
    store = TaskStore(settings)
    await store.connect()
    try:
        async with OpenWeatherProvider.from_settings(settings) as provider:
            lookup = WeatherLookup(provider, TaskService(store))
            result = await lookup.fetch_for_task_id(task_id)
    finally:
        await store.close()

    print(json.dumps(result.to_response(), indent=2))
    return 0 if result.success else 1


def main() -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="TaskWeather - Record tasks and check the weather where they happen"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the web application")
    serve_parser.add_argument("--host", help="Bind address (default: from settings)")
    serve_parser.add_argument(
        "--port", type=int, help="Port to listen on (default: from settings)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )

    # Weather command
    weather_parser = subparsers.add_parser(
        "weather", help="Print current weather for a task as JSON"
    )
    weather_parser.add_argument("task_id", help="Task id")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "serve":
        import uvicorn

        from task_weather.config import get_settings

        settings = get_settings()
        uvicorn.run(
            "task_weather.api.app:create_app",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
        )
        return 0

    return asyncio.run(_weather(args.task_id))


if __name__ == "__main__":
    sys.exit(main())
