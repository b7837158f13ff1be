"""Database module for task weather.

This module provides:
- The `TaskStore` client wrapping an async SQLAlchemy engine
- The `tasks` table model
- Store error types
"""

from task_weather.database.models import Base, TaskRecord
from task_weather.database.store import StoreError, StoreUnavailable, TaskStore

__all__ = [
    # Store
    "TaskStore",
    "StoreError",
    "StoreUnavailable",
    # Models
    "Base",
    "TaskRecord",
]
