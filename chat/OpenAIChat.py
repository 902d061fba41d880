# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-01-29
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

import settings
from prompt.CompletionRequest import Message
from utility.errors import ProviderError, provider_error_from
from utility.logging_utils import get_class_logger


@dataclass
class OpenAIChat:
    """
        Chat wrapper over an async OpenAI-compatible client.

        The client is built by ProviderFactory: AsyncOpenAI for OpenAI or Groq
        (base_url https://api.groq.com/openai/v1), AsyncAzureOpenAI for Azure.
        `model` is the model name, or the deployment name on Azure.
    """

    client: Any
    model: str
    provider_name: str = "openai"
    temperature: float = settings.CHAT_TEMPERATURE
    max_tokens: int = settings.CHAT_MAX_TOKENS
    extra_params: Optional[Dict[str, Any]] = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not self.model:
            raise ValueError("OpenAIChat requires a model (or Azure deployment) name")

        self.logger.info("OpenAIChat initialised (provider=%s, model=%s)", self.provider_name, self.model)

    def _params(self, messages: List[Message], *, stream: bool) -> Dict[str, Any]:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if stream:
            params["stream"] = True
        if self.extra_params:
            params.update(self.extra_params)
        return params

    # Standard chat call
    async def complete(self, messages: List[Message]) -> str:
        params = self._params(messages, stream=False)
        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s messages=%d",
            self.model, self.temperature, self.max_tokens, len(messages)
        )

        try:
            resp = await self.client.chat.completions.create(**params)
        except Exception as e:
            raise provider_error_from(e, self.provider_name) from e

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise ProviderError(f"Unexpected chat response format: {e}", provider=self.provider_name) from e

        self.logger.info("Chat answer generated (model=%s, chars=%d)", getattr(resp, "model", None), len(content))
        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))
        return content

    # Streaming chat call
    async def stream(self, messages: List[Message]) -> AsyncIterator[str]:
        params = self._params(messages, stream=True)

        try:
            response = await self.client.chat.completions.create(**params)
        except Exception as e:
            raise provider_error_from(e, self.provider_name) from e

        try:
            async for event in response:
                if not event.choices:
                    continue
                delta = event.choices[0].delta
                if delta and getattr(delta, "content", None):
                    yield delta.content
        except ProviderError:
            raise
        except Exception as e:
            raise provider_error_from(e, self.provider_name) from e
        finally:
            # releases the HTTP connection when the consumer stops early
            close = getattr(response, "close", None)
            if close is not None:
                await close()

    async def healthcheck(self) -> bool:
        try:
            _ = await self.complete([{"role": "user", "content": "ping"}])
            return True
        except ProviderError as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
