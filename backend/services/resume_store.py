"""Document store for finished analysis records."""

import asyncio
import logging
from typing import Protocol

from models.schemas.analysis_record import AnalysisRecord
from services.errors import StoreError

logger = logging.getLogger(__name__)


class ResumeStore(Protocol):
    async def insert(self, record: AnalysisRecord) -> str: ...

    async def get(self, resume_id: str) -> AnalysisRecord | None: ...


class InMemoryResumeStore:
    """Process-local store keyed by resume id."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._records: dict[str, AnalysisRecord] = {}

    async def insert(self, record: AnalysisRecord) -> str:
        async with self._lock:
            if record.resume_id in self._records:
                raise StoreError(f"Duplicate resume id {record.resume_id}")
            self._records[record.resume_id] = record
        return record.resume_id

    async def get(self, resume_id: str) -> AnalysisRecord | None:
        return self._records.get(resume_id)

    def __len__(self) -> int:
        return len(self._records)


async def persist_record(store: ResumeStore, record: AnalysisRecord) -> None:
    """Background persistence: store failures are logged, never raised."""
    try:
        resume_id = await store.insert(record)
    except StoreError as e:
        logger.error("[%s] Failed to persist analysis record: %s", record.request_id, e)
        return
    except Exception:
        logger.exception("[%s] Unexpected store failure while persisting analysis record", record.request_id)
        return
    logger.info("[%s] Analysis record stored as %s", record.request_id, resume_id)
