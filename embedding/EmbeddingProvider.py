# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: EmbeddingProvider
# -----------------------------------------------------------------------------
from enum import Enum
from typing import List, Protocol, runtime_checkable

import settings


class EmbeddingKind(str, Enum):
    DOCUMENT = "document"
    QUERY = "query"


def frame_text(text: str, kind: EmbeddingKind) -> str:
    """
    Apply the document/query prefix. Documents are framed once at index time,
    queries on every request; both land in the same vector space.
    """
    prefix = settings.EMBED_DOCUMENT_PREFIX if kind == EmbeddingKind.DOCUMENT else settings.EMBED_QUERY_PREFIX
    return f"{prefix}{text}"


@runtime_checkable
class EmbeddingProvider(Protocol):
    async def embed(self, text: str, kind: EmbeddingKind) -> List[float]:
        """Raises ProviderError (or ProviderTransient) on failure."""
        ...
