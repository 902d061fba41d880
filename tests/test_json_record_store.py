# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-01
# Description: test_json_record_store.py
# -----------------------------------------------------------------------------
import json

import pytest

from stubs import ANA, FIVE_RECORDS
from record.JsonRecordStore import JsonRecordStore


@pytest.mark.asyncio
async def test_first_read_seeds_from_seed_file(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps(FIVE_RECORDS[:2]), encoding="utf-8")
    store = JsonRecordStore(tmp_path / "data" / "records.json", seed_path=seed)

    records = await store.list_records()

    assert [r.id for r in records] == ["1", "2"]
    assert (tmp_path / "data" / "records.json").exists()


@pytest.mark.asyncio
async def test_missing_seed_creates_empty_store(tmp_path):
    store = JsonRecordStore(tmp_path / "records.json", seed_path=tmp_path / "nope.json")

    assert await store.list_records() == []


@pytest.mark.asyncio
async def test_save_without_id_assigns_next_numeric_id(tmp_path):
    store = JsonRecordStore(tmp_path / "records.json")
    first = await store.save({k: v for k, v in ANA.items() if k != "id"})
    second = await store.save({**ANA, "id": None, "name": "Otra Persona"})

    assert first.id == "1"
    assert second.id == "2"


@pytest.mark.asyncio
async def test_save_with_id_updates_in_place(tmp_path):
    store = JsonRecordStore(tmp_path / "records.json")
    await store.save(ANA)
    await store.save({**ANA, "city": "Floridablanca"})

    records = await store.list_records()
    assert len(records) == 1
    assert records[0].city == "Floridablanca"


@pytest.mark.asyncio
async def test_delete_reports_whether_anything_was_removed(tmp_path):
    store = JsonRecordStore(tmp_path / "records.json")
    await store.save(ANA)

    assert await store.delete("1") is True
    assert await store.delete("1") is False
    assert await store.list_records() == []


@pytest.mark.asyncio
async def test_malformed_rows_are_skipped(tmp_path):
    path = tmp_path / "records.json"
    path.write_text(json.dumps([ANA, {**ANA, "id": "9", "status": "unknown"}]), encoding="utf-8")
    store = JsonRecordStore(path)

    assert [r.id for r in await store.list_records()] == ["1"]
