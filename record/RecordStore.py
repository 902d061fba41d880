# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: RecordStore
# -----------------------------------------------------------------------------

from typing import Any, Dict, List, Protocol, runtime_checkable

from record.ProfessionalRecord import ProfessionalRecord


@runtime_checkable
class RecordStore(Protocol):
    async def list_records(self) -> List[ProfessionalRecord]:
        ...

    async def save(self, fields: Dict[str, Any]) -> ProfessionalRecord:
        ...

    async def delete(self, record_id: str) -> bool:
        ...
