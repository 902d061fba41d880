# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-29
# Description: CompletionProvider
# -----------------------------------------------------------------------------
from typing import AsyncIterator, List, Protocol, runtime_checkable

from prompt.CompletionRequest import Message


@runtime_checkable
class CompletionProvider(Protocol):
    def stream(self, messages: List[Message]) -> AsyncIterator[str]:
        """Async generator of text chunks. Raises ProviderError."""
        ...

    async def complete(self, messages: List[Message]) -> str:
        """Whole answer in one call. Raises ProviderError."""
        ...
