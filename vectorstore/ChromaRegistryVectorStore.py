# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-16
# Updated: 2026-01-26
# Description: ChromaRegistryVectorStore
# -----------------------------------------------------------------------------
import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from chromadb import ClientAPI
from chromadb.api.models.Collection import Collection

import settings
from embedding.IndexedEntry import IndexedEntry
from utility.logging_utils import get_class_logger
from vectorstore.RegistryVectorStore import SearchHit

# stamped on a generation collection once every batch has been added
COMPLETE_KEY = "registry_complete"


@dataclass
class ChromaRegistryVectorStore:
    """
    One Chroma collection per index generation ("<prefix>-g000042").

    replace_all() fills a brand-new collection, marks it complete and only then
    points the store at it. The previous generation is kept until the next swap
    so searches already running against it can finish; anything older is
    dropped. Collections never marked complete (a rebuild that died midway)
    are never served and are dropped on the next start or swap.
    """
    client: ClientAPI
    collection_prefix: str = settings.VECTOR_COLLECTION_PREFIX
    batch_size: int = 256
    logger: Any = None

    _active: Optional[Tuple[int, Collection]] = field(default=None, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        complete, unfinished = self._scan_generations()
        for leftover in unfinished:
            self.logger.warning("Discarding unfinished index generation %d", leftover)
            self._drop_generation(leftover)

        if complete:
            latest = complete[-1]
            self._active = (latest, self.client.get_collection(name=self._collection_name(latest)))
            for stale in complete[:-2]:
                self._drop_generation(stale)

        self.logger.info(
            "Chroma registry store ready (prefix=%s, active_generation=%s)",
            self.collection_prefix,
            self.generation,
        )

    # -------------------------------------------------------------------------
    @property
    def generation(self) -> Optional[int]:
        return self._active[0] if self._active else None

    def _collection_name(self, generation: int) -> str:
        return f"{self.collection_prefix}-g{generation:06d}"

    def _scan_generations(self) -> Tuple[List[int], List[int]]:
        """(complete, unfinished) generation numbers, ascending."""
        marker = f"{self.collection_prefix}-g"
        complete: List[int] = []
        unfinished: List[int] = []
        for c in self.client.list_collections():
            # chromadb returns names in some releases and Collection objects in others
            name = c if isinstance(c, str) else c.name
            suffix = name[len(marker):] if name.startswith(marker) else ""
            if not suffix.isdigit():
                continue
            collection = self.client.get_collection(name=name) if isinstance(c, str) else c
            if (collection.metadata or {}).get(COMPLETE_KEY):
                complete.append(int(suffix))
            else:
                unfinished.append(int(suffix))
        return sorted(complete), sorted(unfinished)

    def _drop_generation(self, generation: int) -> None:
        name = self._collection_name(generation)
        try:
            self.client.delete_collection(name=name)
            self.logger.info("Dropped index generation collection '%s'", name)
        except Exception as e:
            self.logger.warning("Failed to drop collection '%s': %s", name, e)

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma?
        """
        try:
            self.client.heartbeat()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    # -------------------------------------------------------------------------
    async def exists(self) -> bool:
        return self._active is not None

    async def replace_all(self, entries: Sequence[IndexedEntry]) -> int:
        async with self._lock:
            complete, unfinished = await asyncio.to_thread(self._scan_generations)
            known = complete + unfinished
            new_generation = max(known + [self.generation or 0]) + 1

            collection = await asyncio.to_thread(self._build_generation, new_generation, entries)

            previous = self.generation
            self._active = (new_generation, collection)
            self.logger.info(
                "Swapped in generation %d (%d entries, previous=%s)",
                new_generation,
                len(entries),
                previous,
            )

            for stale in known:
                if stale != previous and stale != new_generation:
                    await asyncio.to_thread(self._drop_generation, stale)

            return new_generation

    def _build_generation(self, generation: int, entries: Sequence[IndexedEntry]) -> Collection:
        name = self._collection_name(generation)
        collection = self.client.create_collection(name=name, metadata={"hnsw:space": "cosine"})

        try:
            for i in range(0, len(entries), self.batch_size):
                batch = entries[i:i + self.batch_size]
                collection.add(
                    ids=[e.id for e in batch],
                    embeddings=[e.vector.tolist() if hasattr(e.vector, "tolist") else list(e.vector) for e in batch],
                    metadatas=[dict(e.payload) for e in batch],
                )
            # cosine space is fixed at creation; chromadb refuses hnsw keys here
            collection.modify(metadata={COMPLETE_KEY: True, "generation": generation})
        except Exception:
            self.logger.error("Failed to populate '%s'; discarding it", name, exc_info=True)
            self._drop_generation(generation)
            raise

        self.logger.debug("Populated collection '%s' with %d entries", name, len(entries))
        return collection

    async def search(self, vector: Sequence[float], k: int) -> List[SearchHit]:
        if self._active is None:
            return []
        generation, collection = self._active

        count = await asyncio.to_thread(collection.count)
        if count == 0:
            return []

        res: Dict[str, Any] = await asyncio.to_thread(
            collection.query,
            query_embeddings=[list(vector)],
            n_results=min(k, count),
            include=["metadatas", "distances"],
        )

        ids0 = (res.get("ids") or [[]])[0]
        metas0 = (res.get("metadatas") or [[]])[0]
        dists0 = (res.get("distances") or [[]])[0]

        # cosine space: distance = 1 - similarity
        hits = [
            SearchHit(id=hit_id, payload=dict(meta or {}), score=1.0 - float(dist))
            for hit_id, meta, dist in zip(ids0, metas0, dists0)
        ]
        hits.sort(key=lambda h: h.score, reverse=True)

        self.logger.debug("Chroma search on generation %d returned %d hits", generation, len(hits))
        return hits[:k]

    async def ids(self) -> Set[str]:
        if self._active is None:
            return set()
        res = await asyncio.to_thread(self._active[1].get, include=[])
        return set(res.get("ids") or [])

    async def count(self) -> int:
        if self._active is None:
            return 0
        return await asyncio.to_thread(self._active[1].count)
