# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-01-25
# Description: OpenAIEmbedder
# -----------------------------------------------------------------------------
import asyncio
from typing import Any, List, Optional

import numpy as np

import settings
from embedding.EmbeddingProvider import EmbeddingKind, frame_text
from utility.errors import ProviderError, ProviderTransient, provider_error_from
from utility.logging_utils import get_class_logger


class OpenAIEmbedder:
    """
    Embedding provider backed by any OpenAI-compatible embeddings endpoint.

    The client is built by ProviderFactory and may be an AsyncOpenAI pointed at
    Ollama (/v1) or OpenAI, or an AsyncAzureOpenAI; this class does not care.
    """

    def __init__(
            self,
            client: Any,
            *,
            model: str,
            provider_name: str = "openai",
            normalize: bool = True,
            max_retries: Optional[int] = None,
            initial_delay: float = 0.8,
            logger=None,
    ):
        self.client = client
        self.model = model
        self.provider_name = provider_name
        self.normalize = normalize
        self.max_retries = settings.EMBED_MAX_RETRIES if max_retries is None else max_retries
        if self.max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self.initial_delay = initial_delay
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info(
            "OpenAIEmbedder initialized (provider=%s, model=%s, normalize=%s)",
            self.provider_name, self.model, self.normalize,
        )

    async def embed(self, text: str, kind: EmbeddingKind) -> List[float]:
        if not text or not text.strip():
            raise ValueError("text to embed must not be empty")

        framed = frame_text(text, kind)
        arr = await self._embed_with_retry(framed)
        return arr.tolist()

    async def _embed_with_retry(self, text: str) -> np.ndarray:
        delay = self.initial_delay
        for attempt in range(1, self.max_retries + 1):
            try:
                return await self._embed_once(text)
            except ProviderTransient as e:
                self.logger.warning("Embedding failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    raise
                await asyncio.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        raise ProviderError("embedding retries exhausted", provider=self.provider_name)

    async def _embed_once(self, text: str) -> np.ndarray:
        try:
            resp = await self.client.embeddings.create(model=self.model, input=[text])
        except Exception as e:
            raise provider_error_from(e, self.provider_name) from e

        if not resp.data or not resp.data[0].embedding:
            raise ProviderError("No embedding data returned in response", provider=self.provider_name)

        arr = np.asarray(resp.data[0].embedding, dtype=np.float32)

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            arr = arr / (np.linalg.norm(arr) + 1e-12)
        return arr
