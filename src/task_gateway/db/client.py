"""SQLite storage for tasks."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Sequence

from ..config import get_settings
from ..errors import PersistenceFailure
from ..models import Task, TaskStatus

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in TaskStatus)


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime as fixed-width UTC ISO 8601 text.

    Fixed microsecond precision keeps lexical and chronological order equal,
    which MAX(created_at) relies on.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse stored ISO 8601 text back into a datetime."""
    return datetime.fromisoformat(value) if value else None


def get_connection() -> sqlite3.Connection:
    """Get a database connection with WAL mode enabled."""
    conn = sqlite3.connect(get_settings().database_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


@contextmanager
def get_db() -> Iterator[sqlite3.Connection]:
    """Context manager for database connections."""
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def read_snapshot() -> Iterator[sqlite3.Connection]:
    """Yield a connection whose reads all see one committed state."""
    with get_db() as conn:
        conn.execute("BEGIN")
        yield conn


def init_db() -> None:
    """Initialize the database schema."""
    with get_db() as conn:
        conn.execute(f"""
            CREATE TABLE IF NOT EXISTS tasks (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL CHECK (length(title) > 0),
                description TEXT,
                status TEXT NOT NULL DEFAULT 'NEW'
                    CHECK (status IN ({_STATUS_VALUES})),
                priority INTEGER,
                due_date TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                CHECK (created_at <= updated_at)
            )
        """)
        conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_tasks_status
            ON tasks(status)
        """)
        conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_tasks_created_at
            ON tasks(created_at)
        """)


def insert_batch(tasks: Sequence[Task]) -> int:
    """Insert all tasks in one transaction and return the row count.

    Either every row is committed or none is.
    """
    rows = [
        (
            task.id,
            task.title,
            task.description,
            task.status.value,
            task.priority,
            format_timestamp(task.due_date) if task.due_date else None,
            format_timestamp(task.created_at),
            format_timestamp(task.updated_at),
        )
        for task in tasks
    ]
    try:
        with get_db() as conn:
            conn.executemany(
                """
                INSERT INTO tasks (
                    id, title, description, status, priority,
                    due_date, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
    except sqlite3.Error as e:
        raise PersistenceFailure(f"failed to persist batch: {e}") from e
    return len(rows)


def count_all(conn: sqlite3.Connection) -> int:
    """Count all tasks."""
    return conn.execute("SELECT COUNT(*) FROM tasks").fetchone()[0]


def count_by_status(conn: sqlite3.Connection, status: TaskStatus) -> int:
    """Count tasks with the given status."""
    cursor = conn.execute(
        "SELECT COUNT(*) FROM tasks WHERE status = ?", (status.value,)
    )
    return cursor.fetchone()[0]


def max_created_timestamp(conn: sqlite3.Connection) -> datetime | None:
    """Get the newest creation time, or None when the table is empty."""
    row = conn.execute("SELECT MAX(created_at) FROM tasks").fetchone()
    return parse_timestamp(row[0])


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=TaskStatus(row["status"]),
        priority=row["priority"],
        due_date=parse_timestamp(row["due_date"]),
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def get_all_tasks(status: str | None = None, limit: int | None = None) -> list[Task]:
    """Get tasks newest first, optionally filtered by status."""
    query = "SELECT * FROM tasks"
    params: list = []
    if status:
        query += " WHERE status = ?"
        params.append(status)
    query += " ORDER BY created_at DESC, id"
    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)

    with get_db() as conn:
        cursor = conn.execute(query, params)
        return [_row_to_task(row) for row in cursor.fetchall()]


def get_task_by_id(task_id: str) -> Task | None:
    """Get a task by ID."""
    with get_db() as conn:
        cursor = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
        row = cursor.fetchone()
        return _row_to_task(row) if row else None
