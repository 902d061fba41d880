# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-02-01
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from stubs import ANA, HashingEmbedder, MemoryRecordStore, ScriptedCompletion  # noqa: E402
from index.IndexSynchronizer import IndexSynchronizer  # noqa: E402
from retrieval.RegistryRetriever import RegistryRetriever  # noqa: E402
from vectorstore.InMemoryRegistryVectorStore import InMemoryRegistryVectorStore  # noqa: E402



@pytest.fixture
def embedder() -> HashingEmbedder:
    return HashingEmbedder()


@pytest.fixture
def vector_store() -> InMemoryRegistryVectorStore:
    return InMemoryRegistryVectorStore()


@pytest.fixture
def record_store() -> MemoryRecordStore:
    return MemoryRecordStore([ANA])


@pytest.fixture
def synchronizer(record_store, embedder, vector_store) -> IndexSynchronizer:
    return IndexSynchronizer(record_store=record_store, embedder=embedder, store=vector_store)


@pytest.fixture
def retriever(embedder, vector_store, synchronizer) -> RegistryRetriever:
    return RegistryRetriever(embedder=embedder, store=vector_store, synchronizer=synchronizer)


@pytest.fixture
def completion() -> ScriptedCompletion:
    return ScriptedCompletion(["Sí, ", "está ", "afiliada."])
