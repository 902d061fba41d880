# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-27
# Updated: 2026-01-30
# Description: RegistryChatService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, Mapping, Sequence

import settings
from prompt.CompletionRequest import CompletionRequest
from prompt.DisclosurePolicy import DisclosurePolicy
from prompt.PromptAssembler import PromptAssembler
from retrieval.RegistryRetriever import RegistryRetriever
from services.AnswerStreamer import AnswerStreamer, diagnostic_text
from utility.logging_utils import get_class_logger


@dataclass
class RegistryChatService:
    """
    Chat Service:
        - short-circuits when no completion provider is configured
        - retrieves the records nearest to the latest user message
        - assembles the policy-constrained prompt
        - streams (or returns) the generated answer
    """
    retriever: RegistryRetriever
    assembler: PromptAssembler
    streamer: AnswerStreamer
    policy: DisclosurePolicy = field(default_factory=DisclosurePolicy)
    k: int = settings.RETRIEVAL_K
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.logger.info(
            "RegistryChatService initialised (k=%d, completion_available=%s)",
            self.k,
            self.streamer.available,
        )

    @staticmethod
    def latest_user_text(messages: Sequence[Mapping[str, str]]) -> str:
        if not messages:
            raise ValueError("messages must not be empty")
        last = messages[-1]
        if last.get("role") == "assistant":
            raise ValueError("the last message must come from the user")
        text = (last.get("content") or "").strip()
        if not text:
            raise ValueError("the last user message must not be empty")
        return text

    async def prepare(self, messages: Sequence[Mapping[str, str]]) -> CompletionRequest:
        """Retrieve + assemble. Query embedding failures propagate."""
        query = self.latest_user_text(messages)
        retrieved = await self.retriever.retrieve(query, self.k)
        return self.assembler.assemble(retrieved, messages, self.policy)

    async def stream_answer(self, messages: Sequence[Mapping[str, str]]) -> AsyncIterator[str]:
        self.latest_user_text(messages)

        if not self.streamer.available:
            yield self.streamer.unavailable_message()
            return

        self.logger.info("stream_answer: turns=%d (start)", len(messages))
        try:
            request = await self.prepare(messages)
        except Exception as e:
            self.logger.error("stream_answer: retrieval failed: %s", e)
            yield diagnostic_text(e)
            return

        async for chunk in self.streamer.stream(request):
            yield chunk
        self.logger.info("stream_answer: records=%d (done)", len(request.record_ids))

    async def answer(self, messages: Sequence[Mapping[str, str]]) -> Dict[str, str]:
        self.latest_user_text(messages)

        if not self.streamer.available:
            return {"role": "assistant", "content": self.streamer.unavailable_message()}

        self.logger.info("answer: turns=%d (start)", len(messages))
        try:
            request = await self.prepare(messages)
        except Exception as e:
            self.logger.error("answer: retrieval failed: %s", e)
            return {"role": "assistant", "content": diagnostic_text(e).strip()}

        content = await self.streamer.complete(request)
        self.logger.info("answer: records=%d answer_chars=%d (done)", len(request.record_ids), len(content))
        return {"role": "assistant", "content": content}
