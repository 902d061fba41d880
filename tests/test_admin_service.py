# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: test_admin_service.py
# -----------------------------------------------------------------------------
import pytest

from stubs import ANA, FIVE_RECORDS, HashingEmbedder
from index.IndexSynchronizer import IndexSynchronizer
from record.JsonRecordStore import JsonRecordStore
from retrieval.RegistryRetriever import RegistryRetriever
from services.RegistryAdminService import RegistryAdminService
from utility.errors import IndexUnavailable
from vectorstore.InMemoryRegistryVectorStore import InMemoryRegistryVectorStore


@pytest.fixture
def wired(tmp_path):
    embedder = HashingEmbedder()
    records = JsonRecordStore(tmp_path / "records.json")
    store = InMemoryRegistryVectorStore()
    sync = IndexSynchronizer(record_store=records, embedder=embedder, store=store)
    admin = RegistryAdminService(record_store=records, synchronizer=sync)
    retriever = RegistryRetriever(embedder=embedder, store=store, synchronizer=sync)
    return admin, retriever, store, embedder


@pytest.mark.asyncio
async def test_save_rebuilds_index_before_returning(wired):
    admin, retriever, store, _ = wired

    result = await admin.save(ANA)

    assert result.index.entry_count == 1
    assert await store.ids() == {"1"}
    assert [r.id for r in await retriever.retrieve("Ana Pérez", 3)] == ["1"]


@pytest.mark.asyncio
async def test_update_is_visible_to_next_query(wired):
    admin, retriever, _, _ = wired
    await admin.save(ANA)

    await admin.save({**ANA, "office": "Clínica Nueva"})

    results = await retriever.retrieve("Ana Pérez", 1)
    assert results[0].payload["office"] == "Clínica Nueva"


@pytest.mark.asyncio
async def test_delete_removes_entry_from_index(wired):
    admin, retriever, store, _ = wired
    for row in FIVE_RECORDS[:3]:
        await admin.save(row)

    result = await admin.delete("2")

    assert result.changed
    assert await store.ids() == {"1", "3"}
    assert "2" not in {r.id for r in await retriever.retrieve("Carlos Rueda", 5)}


@pytest.mark.asyncio
async def test_delete_unknown_id_reports_no_change_without_rebuilding(wired):
    admin, _, store, embedder = wired
    await admin.save(ANA)
    generation = store.generation
    calls = len(embedder.calls)
    # a rebuild now would fail; an unknown id must not trigger one
    embedder.fail_on = ("professional",)

    result = await admin.delete("999")

    assert not result.changed
    assert result.index.entry_count == 1
    assert store.generation == generation
    assert len(embedder.calls) == calls


@pytest.mark.asyncio
async def test_failed_rebuild_propagates_but_keeps_record(wired):
    admin, _, store, embedder = wired
    await admin.save(ANA)
    embedder.fail_on = ("professional",)

    with pytest.raises(IndexUnavailable):
        await admin.save(FIVE_RECORDS[1])

    assert {r.id for r in await admin.list_records()} == {"1", "2"}
    assert await store.ids() == {"1"}
