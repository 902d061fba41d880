# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: api/schemas/records.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RecordIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    specialty: str = ""
    registry_number: str = Field(..., min_length=1)
    city: str = ""
    status: Literal["active", "inactive"] = "active"
    office: str = ""


class RecordOut(BaseModel):
    id: str
    name: str
    specialty: str
    registry_number: str
    city: str
    status: str
    office: str


class RecordListResponse(BaseModel):
    total: int
    records: List[RecordOut] = Field(default_factory=list)


class SyncResponse(BaseModel):
    generation: int
    entries: int
    skipped_ids: List[str] = Field(default_factory=list)
    elapsed_ms: float = 0.0


class RecordMutationResponse(BaseModel):
    success: bool
    record: Optional[RecordOut] = None
    index: SyncResponse
