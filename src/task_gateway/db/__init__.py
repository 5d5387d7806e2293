"""Database package."""

from .client import (
    count_all,
    count_by_status,
    get_all_tasks,
    get_db,
    get_task_by_id,
    init_db,
    insert_batch,
    max_created_timestamp,
    read_snapshot,
)

__all__ = [
    "init_db",
    "get_db",
    "read_snapshot",
    "insert_batch",
    "count_all",
    "count_by_status",
    "max_created_timestamp",
    "get_all_tasks",
    "get_task_by_id",
]
