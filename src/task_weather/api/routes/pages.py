"""Server-rendered task pages.

Store and validation failures are rendered as pages with an error message;
no handler here lets a store exception escape.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from task_weather.api.dependencies import get_task_service
from task_weather.api.templating import templates
from task_weather.database.store import StoreError, StoreUnavailable
from task_weather.models.task import TaskCreate
from task_weather.services.tasks import TaskService, TaskValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

LIST_ERROR = "Database connection failed. Please try again later."
ADD_ERROR = "Failed to add task. Database may be unavailable."


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(
        request, "home.html", {"title": "TaskWeather Dashboard", "error": None}
    )


@router.get("/tasks", response_class=HTMLResponse)
async def list_tasks(
    request: Request,
    error: str | None = None,
    tasks: TaskService = Depends(get_task_service),
):
    """All tasks, soonest first, or an empty list with an error banner."""
    message = LIST_ERROR if error == "database" else None
    try:
        items = await tasks.list()
    except (StoreUnavailable, StoreError) as e:
        logger.error(f"Error loading tasks: {e}")
        items = []
        message = LIST_ERROR

    return templates.TemplateResponse(
        request,
        "tasks.html",
        {"title": "All Tasks", "tasks": items, "error": message},
    )


@router.get("/add", response_class=HTMLResponse)
async def add_task_form(request: Request):
    return templates.TemplateResponse(
        request,
        "add_task.html",
        {"title": "Add New Task", "error": None, "task": None},
    )


@router.post("/add", response_class=HTMLResponse)
async def add_task(
    request: Request,
    activity: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    country: str = Form(""),
    task_date: str = Form("", alias="taskDate"),
    task_time: str = Form("", alias="taskTime"),
    tasks: TaskService = Depends(get_task_service),
):
    """Create a task and go back to the list, or re-render the form."""
    data = TaskCreate(
        activity=activity,
        city=city,
        state=state or None,
        country=country,
        task_date=task_date,
        task_time=task_time or None,
    )
    try:
        await tasks.create(data)
    except TaskValidationError as e:
        return templates.TemplateResponse(
            request,
            "add_task.html",
            {"title": "Add New Task", "error": str(e), "task": data},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except (StoreUnavailable, StoreError) as e:
        logger.error(f"Error adding task: {e}")
        return templates.TemplateResponse(
            request,
            "add_task.html",
            {"title": "Add New Task", "error": ADD_ERROR, "task": data},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return RedirectResponse("/tasks", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/delete/{task_id}")
async def delete_task(
    task_id: str,
    tasks: TaskService = Depends(get_task_service),
):
    """Best-effort delete; always lands back on the task list."""
    try:
        await tasks.remove(task_id)
    except StoreUnavailable:
        return RedirectResponse(
            "/tasks?error=database", status_code=status.HTTP_303_SEE_OTHER
        )
    except StoreError as e:
        logger.error(f"Error deleting task: {e}")

    return RedirectResponse("/tasks", status_code=status.HTTP_303_SEE_OTHER)
