"""FastAPI application and routes.

## Routes

- / - Home page
- /tasks - Task list (degraded view when the database is down)
- /add - Add-task form
- /delete/{task_id} - Delete a task (POST, redirects to /tasks)
- /weather/{task_id} - Current weather for a task (JSON)
- /health - Liveness probe with database status and uptime
"""

from task_weather.api.app import create_app

__all__ = ["create_app"]
