"""Batch persistence."""

from datetime import datetime, timezone

import structlog
from ulid import ULID

from ..db import insert_batch
from ..errors import PersistenceFailure
from ..models import IngestResult, Task, ValidatedBatch

logger = structlog.get_logger(__name__)


def ingest_batch(batch: ValidatedBatch) -> IngestResult:
    """Persist a validated batch as one atomic write.

    Every task in the batch shares a single creation instant. Retries are
    not deduplicated; resubmitting a batch creates new tasks.
    """
    created_at = datetime.now(timezone.utc)
    tasks = [
        Task(
            id=str(ULID()),
            created_at=created_at,
            updated_at=created_at,
            **draft.model_dump(),
        )
        for draft in batch.drafts
    ]

    try:
        inserted = insert_batch(tasks)
    except PersistenceFailure as e:
        logger.error("batch_persist_failed", size=len(tasks), error=e.detail)
        raise

    logger.info(
        "batch_ingested",
        inserted_count=inserted,
        inserted_at=created_at.isoformat(),
        warnings=len(batch.warnings),
    )
    return IngestResult(
        inserted_count=inserted,
        inserted_at=created_at,
        warnings=batch.warnings,
    )
