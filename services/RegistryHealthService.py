# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-01-31
# Description: RegistryHealthService.py
# -----------------------------------------------------------------------------
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from api.schemas.health import DeepHealthResponse, IndexStatus, SmokeTestSummary
from chat.CompletionProvider import CompletionProvider
from embedding.EmbeddingProvider import EmbeddingKind, EmbeddingProvider
from vectorstore.RegistryVectorStore import RegistryVectorStore
from utility.logging_utils import get_class_logger


@dataclass
class RegistryHealthService:
    """
    Runs the smoke checks behind /health/deep and reports a consolidated
    result: configuration gaps, provider round-trips, index status.
    """
    store: RegistryVectorStore
    embedder: Optional[EmbeddingProvider] = None
    completion: Optional[CompletionProvider] = None
    missing_config: List[str] = field(default_factory=list)
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    async def _check_embedding(self) -> bool:
        if self.embedder is None:
            return False
        try:
            start = time.time()
            vector = await self.embedder.embed("registry embedding healthcheck", EmbeddingKind.QUERY)
            self.logger.info(
                "Embedding healthcheck PASSED in %.1f ms (dim=%d)",
                (time.time() - start) * 1000.0,
                len(vector),
            )
            return bool(vector)
        except Exception as e:
            self.logger.exception("Embedding healthcheck FAILED: %s", e)
            return False

    async def _check_completion(self) -> bool:
        healthcheck = getattr(self.completion, "healthcheck", None)
        if healthcheck is None:
            return False
        return await healthcheck()

    async def _check_vector_store(self) -> bool:
        # stores without a remote backend have nothing to ping
        test_connection = getattr(self.store, "test_connection", None)
        if test_connection is None:
            return True
        return await asyncio.to_thread(test_connection)

    async def deep_health(self) -> DeepHealthResponse:
        results: Dict[str, bool] = {
            "configuration": not self.missing_config,
            "embedding": await self._check_embedding(),
            "completion": await self._check_completion(),
            "vector_store": await self._check_vector_store(),
            "index_exists": await self.store.exists(),
        }

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        for name, ok in results.items():
            self.logger.info("  %s: %s", name, "PASS" if ok else "FAIL")

        return DeepHealthResponse(
            status="ok" if failed == 0 else "error",
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
            index=IndexStatus(
                generation=self.store.generation,
                entries=await self.store.count(),
            ),
            missing_config=list(self.missing_config),
        )
