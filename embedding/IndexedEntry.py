# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-01-25
# Description: IndexedEntry
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict

import numpy as np

from record.ProfessionalRecord import ProfessionalRecord


@dataclass
class IndexedEntry:
    """Document vector + a copy of the record fields, one per record."""
    id: str
    vector: np.ndarray
    payload: Dict[str, str]

    @classmethod
    def from_record(cls, record: ProfessionalRecord, vector) -> "IndexedEntry":
        return cls(
            id=record.id,
            vector=np.asarray(vector, dtype=np.float32),
            payload=record.to_dict(),
        )
