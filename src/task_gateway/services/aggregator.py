"""Status summary computed from the store on every call."""

import sqlite3

from ..db import count_all, count_by_status, max_created_timestamp, read_snapshot
from ..errors import PersistenceFailure
from ..models import Summary, TaskStatus


def summarize() -> Summary:
    """Compute total, per-status counts and the latest creation time.

    All reads run inside one snapshot, so the per-status counts always
    sum to the total.
    """
    try:
        with read_snapshot() as conn:
            total = count_all(conn)
            by_status = {status: count_by_status(conn, status) for status in TaskStatus}
            latest = max_created_timestamp(conn)
    except sqlite3.Error as e:
        raise PersistenceFailure(f"failed to read summary: {e}") from e

    return Summary(total=total, by_status=by_status, latest_inserted_at=latest)
