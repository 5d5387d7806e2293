"""Batch validation.

Checks a candidate batch against structural and semantic rules before
anything is written. The first violation rejects the whole batch.
"""

from datetime import datetime, timezone
from typing import Any, Sequence

import structlog
from pydantic import TypeAdapter, ValidationError

from ..config import get_settings
from ..errors import (
    BatchTooLarge,
    EmptyBatch,
    InvalidDescription,
    InvalidDueDate,
    InvalidPriority,
    InvalidRecord,
    InvalidStatus,
    InvalidTitle,
)
from ..models import TaskDraft, TaskStatus, ValidatedBatch, ValidationWarning

logger = structlog.get_logger(__name__)

_STATUS_NAMES = [s.value for s in TaskStatus]
_datetime_adapter = TypeAdapter(datetime)

# SQLite INTEGER is a signed 64-bit value
_SQLITE_INT_MIN = -(2**63)
_SQLITE_INT_MAX = 2**63 - 1


def validate_batch(
    records: Sequence[Any],
    *,
    max_batch_size: int | None = None,
    max_title_length: int | None = None,
) -> ValidatedBatch:
    """Validate and normalize a batch of candidate task records.

    Raises a ``ValidationFailure`` subclass on the first fatal violation.
    Out-of-range priorities are accepted and reported as warnings.
    """
    settings = get_settings()
    if max_batch_size is None:
        max_batch_size = settings.max_batch_size
    if max_title_length is None:
        max_title_length = settings.max_title_length

    if not records:
        raise EmptyBatch()
    if len(records) > max_batch_size:
        raise BatchTooLarge(limit=max_batch_size, actual=len(records))

    drafts = []
    warnings = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise InvalidRecord(f"record {index}: expected an object", index=index)

        title = _check_title(index, record.get("title"), max_title_length)
        status = _check_status(index, record.get("status"))
        description = _check_description(index, record.get("description"))
        priority = _check_priority(index, record.get("priority"))
        due_date = _check_due_date(index, record.get("dueDate"))

        if priority is not None and not (
            settings.priority_min <= priority <= settings.priority_max
        ):
            warning = ValidationWarning(
                index=index,
                field="priority",
                detail=(
                    f"priority {priority} is outside the advisory range "
                    f"{settings.priority_min}-{settings.priority_max}"
                ),
            )
            logger.warning("priority_out_of_range", index=index, priority=priority)
            warnings.append(warning)

        drafts.append(
            TaskDraft(
                title=title,
                description=description,
                status=status,
                priority=priority,
                due_date=due_date,
            )
        )

    return ValidatedBatch(drafts=drafts, warnings=warnings)


def _check_title(index: int, value: Any, max_length: int) -> str:
    if not isinstance(value, str):
        raise InvalidTitle(f"record {index}: title is required", index=index)
    title = value.strip()
    if not title:
        raise InvalidTitle(f"record {index}: title must not be empty", index=index)
    if len(title) > max_length:
        raise InvalidTitle(
            f"record {index}: title is {len(title)} characters, the limit is {max_length}",
            index=index,
        )
    return title


def _check_status(index: int, value: Any) -> TaskStatus:
    if value is None:
        return TaskStatus.NEW
    if not isinstance(value, str) or value not in _STATUS_NAMES:
        raise InvalidStatus(index, value, _STATUS_NAMES)
    return TaskStatus(value)


def _check_description(index: int, value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidDescription(
            f"record {index}: description must be a string", index=index
        )
    return value


def _check_priority(index: int, value: Any) -> int | None:
    if value is None:
        return None
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPriority(
            f"record {index}: priority must be an integer, got {value!r}", index=index
        )
    if not (_SQLITE_INT_MIN <= value <= _SQLITE_INT_MAX):
        raise InvalidPriority(
            f"record {index}: priority {value} does not fit in a 64-bit integer",
            index=index,
        )
    return value


def _check_due_date(index: int, value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidDueDate(f"record {index}: dueDate {value!r} is not a timestamp", index=index)
    try:
        parsed = _datetime_adapter.validate_python(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValidationError, OverflowError) as e:
        raise InvalidDueDate(
            f"record {index}: dueDate {value!r} is not a representable timestamp",
            index=index,
        ) from e
