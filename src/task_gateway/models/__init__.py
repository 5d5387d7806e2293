"""Models package."""

from .task import (
    ErrorResponse,
    IngestResponse,
    IngestResult,
    StatusCounts,
    Summary,
    SummaryResponse,
    Task,
    TaskDraft,
    TaskListResponse,
    TaskResponse,
    TaskStatus,
    ValidatedBatch,
    ValidationWarning,
)

__all__ = [
    "TaskStatus",
    "TaskDraft",
    "Task",
    "ValidationWarning",
    "ValidatedBatch",
    "IngestResult",
    "Summary",
    "IngestResponse",
    "ErrorResponse",
    "StatusCounts",
    "SummaryResponse",
    "TaskResponse",
    "TaskListResponse",
]
