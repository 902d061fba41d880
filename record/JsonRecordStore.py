# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: JsonRecordStore
# -----------------------------------------------------------------------------
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from record.ProfessionalRecord import ProfessionalRecord
from utility.logging_utils import get_class_logger


class JsonRecordStore:
    """
    Record store persisted as a JSON array of objects.

      - first read seeds the file from seed_path (or an empty list)
      - save() without an id creates a record with the next numeric id
      - save() with an id replaces that record, or appends it if unknown
      - delete() removes by id

    File I/O runs in a worker thread; writers are serialised with a lock.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        seed_path: str | Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.path = Path(path)
        self.seed_path = Path(seed_path) if seed_path else None
        self.logger = logger or get_class_logger(self.__class__)
        self._write_lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    async def list_records(self) -> List[ProfessionalRecord]:
        rows = await asyncio.to_thread(self._read_rows)
        records: List[ProfessionalRecord] = []
        for row in rows:
            try:
                records.append(ProfessionalRecord.from_dict(row))
            except ValueError as e:
                self.logger.warning("Skipping malformed record in '%s': %s", self.path, e)
        return records

    async def save(self, fields: Dict[str, Any]) -> ProfessionalRecord:
        async with self._write_lock:
            rows = await asyncio.to_thread(self._read_rows)

            record_id = str(fields.get("id") or "").strip()
            if not record_id:
                record_id = self._next_id(rows)

            record = ProfessionalRecord.from_dict({**fields, "id": record_id})
            row = record.to_dict()

            for i, existing in enumerate(rows):
                if str(existing.get("id")) == record_id:
                    rows[i] = row
                    action = "updated"
                    break
            else:
                rows.append(row)
                action = "created"

            await asyncio.to_thread(self._write_rows, rows)

        self.logger.info("Record %s (id=%s, total=%d)", action, record_id, len(rows))
        return record

    async def delete(self, record_id: str) -> bool:
        async with self._write_lock:
            rows = await asyncio.to_thread(self._read_rows)
            kept = [r for r in rows if str(r.get("id")) != record_id]
            if len(kept) == len(rows):
                self.logger.info("Delete requested for unknown record id=%s", record_id)
                return False
            await asyncio.to_thread(self._write_rows, kept)

        self.logger.info("Record deleted (id=%s, total=%d)", record_id, len(kept))
        return True

    # -------------------------------------------------------------------------
    @staticmethod
    def _next_id(rows: List[Dict[str, Any]]) -> str:
        numeric = []
        for r in rows:
            try:
                numeric.append(int(str(r.get("id"))))
            except ValueError:
                continue
        return str(max(numeric) + 1) if numeric else "1"

    def _read_rows(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            self._seed()

        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)

        if not isinstance(data, list):
            raise ValueError(f"Record file '{self.path}' must contain a JSON array")
        return [row for row in data if isinstance(row, dict)]

    def _seed(self) -> None:
        rows: List[Dict[str, Any]] = []
        if self.seed_path is not None and self.seed_path.exists():
            with self.seed_path.open("r", encoding="utf-8") as fh:
                rows = json.load(fh)
            self.logger.info("Seeding record store '%s' from '%s' (%d rows)", self.path, self.seed_path, len(rows))
        else:
            self.logger.info("Creating empty record store at '%s'", self.path)
        self._write_rows(rows)

    def _write_rows(self, rows: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(rows, fh, ensure_ascii=False, indent=2)
        tmp.replace(self.path)
