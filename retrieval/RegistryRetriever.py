# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-01-27
# Description: RegistryRetriever
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Dict, List

import settings
from embedding.EmbeddingProvider import EmbeddingKind, EmbeddingProvider
from index.IndexSynchronizer import IndexSynchronizer
from utility.errors import IndexUnavailable
from utility.logging_utils import get_class_logger
from vectorstore.RegistryVectorStore import RegistryVectorStore


@dataclass(frozen=True)
class RetrievedRecord:
    payload: Dict[str, str]
    score: float

    @property
    def id(self) -> str:
        return self.payload.get("id", "")


@dataclass
class RegistryRetriever:
    embedder: EmbeddingProvider
    store: RegistryVectorStore
    synchronizer: IndexSynchronizer
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    async def retrieve(self, query_text: str, k: int = settings.RETRIEVAL_K) -> List[RetrievedRecord]:
        """
        Nearest records to query_text, highest similarity first, at most k.

        A missing index is built on the spot; if that rebuild fails the
        result is empty rather than an error. Query embedding failures
        (ProviderError) propagate to the caller.
        """
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")

        q = (query_text or "").strip()
        if not q:
            raise ValueError("query_text must not be empty")

        try:
            await self.synchronizer.ensure_index()
        except IndexUnavailable as e:
            self.logger.warning("retrieve: index unavailable, continuing with empty context: %s", e)
            return []

        vector = await self.embedder.embed(q, EmbeddingKind.QUERY)
        hits = await self.store.search(vector, k)

        results = [
            RetrievedRecord(payload={**h.payload, "id": h.id}, score=h.score)
            for h in sorted(hits, key=lambda h: h.score, reverse=True)[:k]
        ]

        self.logger.info(
            "retrieve: query_chars=%d k=%d hits=%d top_score=%s",
            len(q),
            k,
            len(results),
            f"{results[0].score:.4f}" if results else None,
        )
        return results
