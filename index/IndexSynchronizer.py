# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Description: IndexSynchronizer
# -----------------------------------------------------------------------------
import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import settings
from embedding.EmbeddingProvider import EmbeddingKind, EmbeddingProvider
from embedding.IndexedEntry import IndexedEntry
from record.ProfessionalRecord import ProfessionalRecord
from record.RecordStore import RecordStore
from utility.errors import IndexUnavailable
from utility.logging_utils import get_class_logger
from vectorstore.RegistryVectorStore import RegistryVectorStore


@dataclass(frozen=True)
class IndexHandle:
    generation: int
    entry_count: int
    skipped_ids: Tuple[str, ...] = ()
    elapsed_ms: float = 0.0


@dataclass
class IndexSynchronizer:
    """
    Rebuilds the whole vector index from the record store.

      - every record is embedded with the document framing
      - a record whose embedding fails is logged and left out
      - if every record fails, the rebuild is aborted and the current
        generation stays in place (IndexUnavailable)
      - the finished generation replaces the old one as a unit

    Runs are serialised by a single-writer lock and shielded from caller
    cancellation, so a rebuild either completes or never swaps anything in.
    One record edit therefore costs one full rebuild (n embedding calls).
    """
    record_store: RecordStore
    embedder: EmbeddingProvider
    store: RegistryVectorStore
    concurrency: int = settings.EMBED_CONCURRENCY
    logger: logging.Logger | None = None

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _handle: Optional[IndexHandle] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    @property
    def handle(self) -> Optional[IndexHandle]:
        return self._handle

    async def sync(self) -> IndexHandle:
        """Full rebuild. Idempotent; safe when no index exists yet."""
        return await asyncio.shield(self._start(only_if_missing=False))

    async def ensure_index(self) -> IndexHandle:
        """
        Return the current index, building it first if none exists. Concurrent
        callers on a cold start share one rebuild.
        """
        if await self.store.exists() and self._handle is not None:
            return self._handle
        return await asyncio.shield(self._start(only_if_missing=True))

    # -------------------------------------------------------------------------
    def _start(self, *, only_if_missing: bool) -> "asyncio.Future[IndexHandle]":
        task = asyncio.ensure_future(self._run_locked(only_if_missing=only_if_missing))
        task.add_done_callback(self._collect_outcome)
        return task

    def _collect_outcome(self, task: "asyncio.Future[IndexHandle]") -> None:
        # the caller may have been cancelled and is no longer awaiting the shielded run
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.debug("Index sync run ended with %s: %s", type(exc).__name__, exc)

    async def _run_locked(self, *, only_if_missing: bool) -> IndexHandle:
        async with self._lock:
            if only_if_missing and await self.store.exists():
                if self._handle is None:
                    # index was built by an earlier process
                    self._handle = IndexHandle(
                        generation=self.store.generation or 0,
                        entry_count=await self.store.count(),
                    )
                return self._handle
            return await self._rebuild()

    async def _rebuild(self) -> IndexHandle:
        start = time.perf_counter()

        try:
            records = await self.record_store.list_records()
        except Exception as e:
            self.logger.error("Index sync aborted: could not read records: %s", e, exc_info=True)
            raise IndexUnavailable(f"record store unreadable: {e}") from e

        unique: List[ProfessionalRecord] = []
        seen = set()
        for r in records:
            if r.id not in seen:
                seen.add(r.id)
                unique.append(r)
        if len(unique) != len(records):
            self.logger.warning("Record store holds %d duplicate ids; keeping first occurrence", len(records) - len(unique))
            records = unique

        self.logger.info("Index sync started (records=%d, concurrency=%d)", len(records), self.concurrency)

        entries, skipped = await self._embed_records(records)

        if records and not entries:
            self.logger.error(
                "Index sync aborted: all %d embeddings failed; keeping generation %s",
                len(records),
                self.store.generation,
            )
            raise IndexUnavailable(f"all {len(records)} record embeddings failed")

        generation = await self.store.replace_all(entries)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        self._handle = IndexHandle(
            generation=generation,
            entry_count=len(entries),
            skipped_ids=tuple(skipped),
            elapsed_ms=elapsed_ms,
        )
        self.logger.info(
            "Index sync complete: generation=%d entries=%d skipped=%d (%.1f ms)",
            generation,
            len(entries),
            len(skipped),
            elapsed_ms,
        )
        return self._handle

    async def _embed_records(
            self,
            records: List[ProfessionalRecord],
    ) -> Tuple[List[IndexedEntry], List[str]]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def embed_one(record: ProfessionalRecord) -> Optional[IndexedEntry]:
            async with semaphore:
                try:
                    vector = await self.embedder.embed(record.document_text(), EmbeddingKind.DOCUMENT)
                except Exception as e:
                    self.logger.warning("Excluding record id=%s from index: embedding failed: %s", record.id, e)
                    return None
            return IndexedEntry.from_record(record, vector)

        results = await asyncio.gather(*(embed_one(r) for r in records))

        # the dimension most vectors agree on; one odd vector cannot exclude the rest
        dims = Counter(entry.vector.shape[0] for entry in results if entry is not None)
        dim = dims.most_common(1)[0][0] if dims else None

        entries: List[IndexedEntry] = []
        skipped: List[str] = []
        for record, entry in zip(records, results):
            if entry is None:
                skipped.append(record.id)
                continue
            if entry.vector.shape[0] != dim:
                self.logger.warning(
                    "Excluding record id=%s: vector dimension %d != %d",
                    record.id, entry.vector.shape[0], dim,
                )
                skipped.append(record.id)
                continue
            entries.append(entry)

        return entries, skipped
