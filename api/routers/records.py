# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: records router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_admin_service
from api.schemas.records import (
    RecordIn,
    RecordListResponse,
    RecordMutationResponse,
    RecordOut,
    SyncResponse,
)
from index.IndexSynchronizer import IndexHandle
from services.RegistryAdminService import RegistryAdminService
from utility.errors import IndexUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/records", tags=["records"])


def _sync_response(handle: IndexHandle) -> SyncResponse:
    return SyncResponse(
        generation=handle.generation,
        entries=handle.entry_count,
        skipped_ids=list(handle.skipped_ids),
        elapsed_ms=handle.elapsed_ms,
    )


@router.get("", response_model=RecordListResponse)
async def list_records(
    svc: RegistryAdminService = Depends(get_admin_service),
) -> RecordListResponse:
    records = await svc.list_records()
    return RecordListResponse(
        total=len(records),
        records=[RecordOut(**r.to_dict()) for r in records],
    )


@router.post("", response_model=RecordMutationResponse)
async def save_record(
    req: RecordIn,
    svc: RegistryAdminService = Depends(get_admin_service),
) -> RecordMutationResponse:
    logger.info("POST /records (start) id=%s", req.id)
    try:
        result = await svc.save(req.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IndexUnavailable as e:
        logger.error("POST /records: record saved but index rebuild failed: %s", e)
        raise HTTPException(status_code=503, detail=f"record saved but index rebuild failed: {e}")

    return RecordMutationResponse(
        success=True,
        record=RecordOut(**result.record.to_dict()),
        index=_sync_response(result.index),
    )


@router.delete("/{record_id}", response_model=RecordMutationResponse)
async def delete_record(
    record_id: str,
    svc: RegistryAdminService = Depends(get_admin_service),
) -> RecordMutationResponse:
    logger.info("DELETE /records/%s (start)", record_id)
    try:
        result = await svc.delete(record_id)
    except IndexUnavailable as e:
        logger.error("DELETE /records/%s: index rebuild failed: %s", record_id, e)
        raise HTTPException(status_code=503, detail=f"record deleted but index rebuild failed: {e}")

    if not result.changed:
        raise HTTPException(status_code=404, detail=f"record {record_id!r} not found")

    return RecordMutationResponse(success=True, index=_sync_response(result.index))


@router.post("/sync", response_model=SyncResponse)
async def resync(
    svc: RegistryAdminService = Depends(get_admin_service),
) -> SyncResponse:
    try:
        handle = await svc.resync()
    except IndexUnavailable as e:
        logger.error("POST /records/sync failed: %s", e)
        raise HTTPException(status_code=503, detail=f"index rebuild failed: {e}")
    return _sync_response(handle)
