# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: AnswerStreamer.py
# -----------------------------------------------------------------------------
import logging
from typing import AsyncIterator, Optional

import settings
from chat.CompletionProvider import CompletionProvider
from prompt.CompletionRequest import CompletionRequest
from utility.errors import ConfigurationMissing, ProviderError
from utility.logging_utils import get_class_logger


def diagnostic_text(exc: BaseException) -> str:
    """Short, caller-safe description of a failure (no credentials, no stack)."""
    if isinstance(exc, ProviderError):
        reason = exc.caller_message
    else:
        reason = "error inesperado"
    return settings.DIAGNOSTIC_MESSAGE.format(reason=reason)


def unavailable_text(exc: ConfigurationMissing) -> str:
    return settings.UNAVAILABLE_MESSAGE.format(missing=", ".join(exc.missing))


class AnswerStreamer:
    """
    Relays completion chunks to the caller as they arrive.

      - provider failure (before or mid-stream) -> one diagnostic chunk, then end
      - no provider configured -> one explanatory chunk
      - consumer stops early -> the provider stream is closed
    """

    def __init__(
            self,
            provider: Optional[CompletionProvider],
            *,
            unavailable: Optional[ConfigurationMissing] = None,
            logger: logging.Logger | None = None,
    ) -> None:
        if provider is None and unavailable is None:
            raise ValueError("AnswerStreamer needs a provider or the reason it is unavailable")
        self.provider = provider
        self.unavailable = unavailable
        self.logger = logger or get_class_logger(self.__class__)

    @property
    def available(self) -> bool:
        return self.provider is not None

    def unavailable_message(self) -> str:
        return unavailable_text(self.unavailable) if self.unavailable else ""

    async def stream(self, request: CompletionRequest) -> AsyncIterator[str]:
        if self.provider is None:
            self.logger.warning("stream: completion provider unavailable: %s", self.unavailable)
            yield self.unavailable_message()
            return

        chunks = self.provider.stream(request.messages)
        emitted = 0
        try:
            async for chunk in chunks:
                if chunk:
                    emitted += 1
                    yield chunk
        except Exception as e:
            self.logger.error("stream: provider failed after %d chunks: %s", emitted, e, exc_info=True)
            yield diagnostic_text(e)
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()
            self.logger.debug("stream: closed after %d chunks", emitted)

    async def complete(self, request: CompletionRequest) -> str:
        """Non-streaming variant; never raises for provider failures."""
        if self.provider is None:
            self.logger.warning("complete: completion provider unavailable: %s", self.unavailable)
            return self.unavailable_message()

        try:
            content = await self.provider.complete(request.messages)
        except Exception as e:
            self.logger.error("complete: provider failed: %s", e, exc_info=True)
            return diagnostic_text(e).strip()

        return content or settings.EMPTY_ANSWER_MESSAGE
