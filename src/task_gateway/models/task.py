"""Pydantic models for tasks and the ingestion API."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Task status enumeration."""

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    BLOCKED = "BLOCKED"


class TaskDraft(BaseModel):
    """A validated record that has not been persisted yet."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.NEW
    priority: int | None = None
    due_date: datetime | None = None


class Task(TaskDraft):
    """A persisted task."""

    id: str
    created_at: datetime
    updated_at: datetime


class ValidationWarning(BaseModel):
    """A non-fatal finding attached to an accepted record."""

    index: int
    field: str
    detail: str


class ValidatedBatch(BaseModel):
    """Drafts accepted by the validator, in submission order."""

    drafts: list[TaskDraft]
    warnings: list[ValidationWarning] = Field(default_factory=list)


class IngestResult(BaseModel):
    """Outcome of a committed batch."""

    inserted_count: int
    inserted_at: datetime
    warnings: list[ValidationWarning] = Field(default_factory=list)


class Summary(BaseModel):
    """Aggregate view over the stored tasks."""

    total: int
    by_status: dict[TaskStatus, int]
    latest_inserted_at: datetime | None = None


# =============================================================================
# Wire models
# =============================================================================


class IngestResponse(BaseModel):
    """Response model for a committed batch."""

    model_config = ConfigDict(populate_by_name=True)

    inserted_count: int = Field(..., alias="insertedCount")
    inserted_at: datetime = Field(..., alias="insertedAt")
    warnings: list[ValidationWarning] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Response model for a rejected batch or a failed write."""

    model_config = ConfigDict(populate_by_name=True)

    error_kind: str = Field(..., alias="errorKind")
    detail: str
    index: int | None = None
    retryable: bool = False


class StatusCounts(BaseModel):
    """Per-status counts, always populated for every status."""

    NEW: int = 0
    IN_PROGRESS: int = 0
    DONE: int = 0
    BLOCKED: int = 0


class SummaryResponse(BaseModel):
    """Response model for the aggregate summary."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    by_status: StatusCounts = Field(..., alias="byStatus")
    latest_inserted_at: datetime | None = Field(None, alias="latestInsertedAt")


class TaskResponse(BaseModel):
    """Response model for a task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    status: TaskStatus
    priority: int | None = None
    due_date: datetime | None = Field(None, alias="dueDate")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class TaskListResponse(BaseModel):
    """Response model for task list."""

    tasks: list[TaskResponse]
    count: int
