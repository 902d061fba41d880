# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: InMemoryRegistryVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from embedding.IndexedEntry import IndexedEntry
from utility.logging_utils import get_class_logger
from vectorstore.RegistryVectorStore import SearchHit


@dataclass(frozen=True)
class _Generation:
    number: int
    ids: Tuple[str, ...]
    payloads: Tuple[Dict[str, str], ...]
    matrix: np.ndarray  # rows are unit vectors


class InMemoryRegistryVectorStore:
    """
    Flat cosine index held in process memory. A generation is an immutable
    snapshot; replace_all() swaps a single reference, so a search that already
    picked up the previous snapshot finishes against it.
    """

    def __init__(self, logger=None) -> None:
        self.logger = logger or get_class_logger(self.__class__)
        self._current: Optional[_Generation] = None
        self._counter = 0

    @property
    def generation(self) -> Optional[int]:
        return self._current.number if self._current else None

    async def exists(self) -> bool:
        return self._current is not None

    async def replace_all(self, entries: Sequence[IndexedEntry]) -> int:
        ids = tuple(e.id for e in entries)
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate ids in index generation")

        if entries:
            matrix = np.vstack([np.asarray(e.vector, dtype=np.float32) for e in entries])
            norms = np.linalg.norm(matrix, axis=1, keepdims=True) + 1e-12
            matrix = matrix / norms
        else:
            matrix = np.empty((0, 0), dtype=np.float32)

        self._counter += 1
        self._current = _Generation(
            number=self._counter,
            ids=ids,
            payloads=tuple(dict(e.payload) for e in entries),
            matrix=matrix,
        )
        self.logger.info("Swapped in generation %d (%d entries)", self._counter, len(ids))
        return self._counter

    async def search(self, vector: Sequence[float], k: int) -> List[SearchHit]:
        gen = self._current
        if gen is None or not gen.ids:
            return []

        q = np.asarray(vector, dtype=np.float32)
        if q.shape[0] != gen.matrix.shape[1]:
            raise ValueError(
                f"query vector has dimension {q.shape[0]}, index has {gen.matrix.shape[1]}"
            )
        q = q / (np.linalg.norm(q) + 1e-12)

        scores = gen.matrix @ q
        # stable sort keeps index order for ties
        order = np.argsort(-scores, kind="stable")[:k]
        return [
            SearchHit(id=gen.ids[i], payload=dict(gen.payloads[i]), score=float(scores[i]))
            for i in order
        ]

    async def ids(self) -> Set[str]:
        return set(self._current.ids) if self._current else set()

    async def count(self) -> int:
        return len(self._current.ids) if self._current else 0
