# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Updated: 2026-01-26
# Description: RegistryVectorStore
# -----------------------------------------------------------------------------

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Set, runtime_checkable

from embedding.IndexedEntry import IndexedEntry


@dataclass(frozen=True)
class SearchHit:
    id: str
    payload: Dict[str, str]
    score: float  # cosine similarity, higher is nearer


@runtime_checkable
class RegistryVectorStore(Protocol):
    """
    Generation-based vector index. replace_all() builds a complete new
    generation and swaps it in as a unit; readers see either the old or the
    new generation, never a partially populated one.
    """

    @property
    def generation(self) -> Optional[int]:
        ...

    async def exists(self) -> bool:
        ...

    async def replace_all(self, entries: Sequence[IndexedEntry]) -> int:
        ...

    async def search(self, vector: Sequence[float], k: int) -> List[SearchHit]:
        ...

    async def ids(self) -> Set[str]:
        ...

    async def count(self) -> int:
        ...
