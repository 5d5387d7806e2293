"""Error taxonomy for batch ingestion.

Caller-input errors derive from :class:`ValidationFailure` and are never
retryable; :class:`PersistenceFailure` signals an infrastructure problem the
caller may retry by resubmitting the whole batch.
"""

from typing import Any


class TaskGatewayError(Exception):
    """Base class for every error surfaced to callers."""

    error_kind = "TaskGatewayError"
    retryable = False

    def __init__(self, detail: str, index: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.index = index

    def to_dict(self) -> dict[str, Any]:
        """Render the error as the wire payload."""
        return {
            "errorKind": self.error_kind,
            "detail": self.detail,
            "index": self.index,
            "retryable": self.retryable,
        }


class ValidationFailure(TaskGatewayError):
    """A batch was rejected before anything was written."""


class EmptyBatch(ValidationFailure):
    error_kind = "EmptyBatch"

    def __init__(self):
        super().__init__("batch must contain at least one record")


class BatchTooLarge(ValidationFailure):
    error_kind = "BatchTooLarge"

    def __init__(self, limit: int, actual: int):
        super().__init__(f"batch size {actual} exceeds the limit of {limit}")
        self.limit = limit
        self.actual = actual


class InvalidRecord(ValidationFailure):
    error_kind = "InvalidRecord"


class InvalidTitle(ValidationFailure):
    error_kind = "InvalidTitle"


class InvalidStatus(ValidationFailure):
    error_kind = "InvalidStatus"

    def __init__(self, index: int, value: Any, allowed: list[str]):
        super().__init__(
            f"record {index}: unknown status {value!r}, expected one of {', '.join(allowed)}",
            index=index,
        )
        self.value = value


class InvalidDescription(ValidationFailure):
    error_kind = "InvalidDescription"


class InvalidPriority(ValidationFailure):
    error_kind = "InvalidPriority"


class InvalidDueDate(ValidationFailure):
    error_kind = "InvalidDueDate"


class PersistenceFailure(TaskGatewayError):
    """The store could not commit the batch; nothing was written."""

    error_kind = "PersistenceFailure"
    retryable = True
