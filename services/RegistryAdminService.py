# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: RegistryAdminService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from index.IndexSynchronizer import IndexHandle, IndexSynchronizer
from record.ProfessionalRecord import ProfessionalRecord
from record.RecordStore import RecordStore
from utility.logging_utils import get_class_logger


@dataclass
class AdminResult:
    record: Optional[ProfessionalRecord]
    changed: bool
    index: Optional[IndexHandle]


@dataclass
class RegistryAdminService:
    """
    Record mutations for the admin surface. A mutation is complete only once
    the index has been rebuilt; IndexUnavailable from the rebuild propagates
    (the record change itself is already persisted).
    """
    record_store: RecordStore
    synchronizer: IndexSynchronizer
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    async def list_records(self) -> List[ProfessionalRecord]:
        return await self.record_store.list_records()

    async def save(self, fields: Dict[str, Any]) -> AdminResult:
        record = await self.record_store.save(fields)
        handle = await self.synchronizer.sync()
        self.logger.info("save: id=%s generation=%d", record.id, handle.generation)
        return AdminResult(record=record, changed=True, index=handle)

    async def delete(self, record_id: str) -> AdminResult:
        removed = await self.record_store.delete(record_id)
        if not removed:
            # nothing changed, the current index is still accurate
            self.logger.info("delete: id=%s not found; index left as is", record_id)
            return AdminResult(record=None, changed=False, index=self.synchronizer.handle)

        handle = await self.synchronizer.sync()
        self.logger.info("delete: id=%s generation=%d", record_id, handle.generation)
        return AdminResult(record=None, changed=True, index=handle)

    async def resync(self) -> IndexHandle:
        return await self.synchronizer.sync()
