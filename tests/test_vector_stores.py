# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: test_vector_stores.py
# -----------------------------------------------------------------------------
import uuid

import chromadb
import numpy as np
import pytest

from stubs import FIVE_RECORDS
from embedding.IndexedEntry import IndexedEntry
from record.ProfessionalRecord import ProfessionalRecord
from vectorstore.ChromaRegistryVectorStore import ChromaRegistryVectorStore
from vectorstore.InMemoryRegistryVectorStore import InMemoryRegistryVectorStore
from vectorstore.RegistryVectorStore import RegistryVectorStore


def _entries():
    axes = np.eye(5, dtype=np.float32)
    return [
        IndexedEntry.from_record(ProfessionalRecord.from_dict(row), axes[i])
        for i, row in enumerate(FIVE_RECORDS)
    ]


@pytest.fixture
def chroma_store() -> ChromaRegistryVectorStore:
    # unique prefix keeps tests apart on the shared in-process client
    return ChromaRegistryVectorStore(
        client=chromadb.EphemeralClient(),
        collection_prefix=f"t{uuid.uuid4().hex[:10]}",
    )


@pytest.fixture(params=["memory", "chroma"])
def any_store(request):
    if request.param == "memory":
        return InMemoryRegistryVectorStore()
    return request.getfixturevalue("chroma_store")


def test_stores_satisfy_protocol(chroma_store):
    assert isinstance(InMemoryRegistryVectorStore(), RegistryVectorStore)
    assert isinstance(chroma_store, RegistryVectorStore)


@pytest.mark.asyncio
async def test_new_store_has_no_index(any_store):
    assert not await any_store.exists()
    assert any_store.generation is None
    assert await any_store.search([1.0, 0, 0, 0, 0], 3) == []


@pytest.mark.asyncio
async def test_replace_all_then_search_nearest_first(any_store):
    generation = await any_store.replace_all(_entries())

    hits = await any_store.search([0.1, 0.0, 0.9, 0.2, 0.0], 3)

    assert generation == 1
    assert [h.id for h in hits][0] == "3"
    assert len(hits) == 3
    assert [h.score for h in hits] == sorted((h.score for h in hits), reverse=True)
    assert hits[0].payload["name"] == "Lucía Gómez"


@pytest.mark.asyncio
async def test_k_larger_than_index_returns_everything(any_store):
    await any_store.replace_all(_entries()[:2])

    hits = await any_store.search([1.0, 0, 0, 0, 0], 10)

    assert {h.id for h in hits} == {"1", "2"}


@pytest.mark.asyncio
async def test_replace_all_swaps_whole_generation(any_store):
    await any_store.replace_all(_entries())
    second = await any_store.replace_all(_entries()[:2])

    assert second == 2
    assert any_store.generation == 2
    assert await any_store.ids() == {"1", "2"}
    assert await any_store.count() == 2


@pytest.mark.asyncio
async def test_empty_generation_exists_but_returns_nothing(any_store):
    await any_store.replace_all([])

    assert await any_store.exists()
    assert await any_store.search([1.0, 0, 0, 0, 0], 3) == []


@pytest.mark.asyncio
async def test_identical_vector_scores_near_one(any_store):
    await any_store.replace_all(_entries())

    hits = await any_store.search([0, 0, 0, 1.0, 0], 1)

    assert hits[0].id == "4"
    assert hits[0].score == pytest.approx(1.0, abs=1e-3)


@pytest.mark.asyncio
async def test_chroma_store_resumes_latest_generation_and_drops_stale():
    client = chromadb.EphemeralClient()
    prefix = f"t{uuid.uuid4().hex[:10]}"
    first = ChromaRegistryVectorStore(client=client, collection_prefix=prefix)
    for _ in range(3):
        await first.replace_all(_entries())

    names = {c if isinstance(c, str) else c.name for c in client.list_collections()}
    ours = sorted(n for n in names if n.startswith(prefix))
    # current generation plus the one before it
    assert ours == [f"{prefix}-g000002", f"{prefix}-g000003"]

    reopened = ChromaRegistryVectorStore(client=client, collection_prefix=prefix)
    assert reopened.generation == 3
    assert await reopened.count() == 5


@pytest.mark.asyncio
async def test_chroma_store_never_resumes_an_unfinished_generation():
    client = chromadb.EphemeralClient()
    prefix = f"t{uuid.uuid4().hex[:10]}"
    first = ChromaRegistryVectorStore(client=client, collection_prefix=prefix)
    generation = await first.replace_all(_entries())
    # a rebuild that died after creating its collection but before finishing
    client.create_collection(name=f"{prefix}-g000002", metadata={"hnsw:space": "cosine"})

    restarted = ChromaRegistryVectorStore(client=client, collection_prefix=prefix)

    assert restarted.generation == generation
    assert await restarted.count() == 5
    names = {c if isinstance(c, str) else c.name for c in client.list_collections()}
    assert f"{prefix}-g000002" not in names

    assert await restarted.replace_all(_entries()[:2]) == 2
    assert await restarted.ids() == {"1", "2"}


@pytest.mark.asyncio
async def test_in_memory_rejects_duplicate_ids():
    entries = _entries()
    entries.append(entries[0])

    with pytest.raises(ValueError):
        await InMemoryRegistryVectorStore().replace_all(entries)
