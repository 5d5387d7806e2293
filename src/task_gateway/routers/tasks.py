"""Task API router."""

from typing import Any

import structlog
from fastapi import APIRouter, Body, HTTPException, Query, status

from ..db import get_all_tasks, get_task_by_id
from ..errors import ValidationFailure
from ..models import (
    ErrorResponse,
    IngestResponse,
    StatusCounts,
    SummaryResponse,
    TaskListResponse,
    TaskResponse,
    TaskStatus,
)
from ..services.aggregator import summarize
from ..services.ingestor import ingest_batch
from ..services.validator import validate_batch

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

logger = structlog.get_logger(__name__)


# =============================================================================
# Ingestion & Summary - Must be defined BEFORE /{task_id} routes
# =============================================================================


@router.post(
    "/batch",
    response_model=IngestResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
def ingest_tasks(records: list[Any] = Body(...)):
    """Validate a batch of tasks and persist it atomically."""
    try:
        batch = validate_batch(records)
    except ValidationFailure as e:
        logger.info(
            "batch_rejected",
            error_kind=e.error_kind,
            index=e.index,
            size=len(records),
        )
        raise

    result = ingest_batch(batch)
    return IngestResponse(
        inserted_count=result.inserted_count,
        inserted_at=result.inserted_at,
        warnings=result.warnings,
    )


@router.get(
    "/summary",
    response_model=SummaryResponse,
    responses={503: {"model": ErrorResponse}},
)
def get_summary():
    """Get total, per-status counts and the latest insertion time."""
    summary = summarize()
    return SummaryResponse(
        total=summary.total,
        by_status=StatusCounts(
            **{s.value: count for s, count in summary.by_status.items()}
        ),
        latest_inserted_at=summary.latest_inserted_at,
    )


# =============================================================================
# Read-back Endpoints
# =============================================================================


@router.get("", response_model=TaskListResponse)
def list_tasks(
    status: TaskStatus | None = None,
    limit: int | None = Query(None, ge=1, le=1000),
):
    """Get tasks newest first, optionally filtered by status."""
    status_value = status.value if status else None
    tasks = get_all_tasks(status=status_value, limit=limit)
    return TaskListResponse(
        tasks=[TaskResponse(**task.model_dump()) for task in tasks],
        count=len(tasks),
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str):
    """Get a task by ID."""
    task = get_task_by_id(task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )
    return TaskResponse(**task.model_dump())
