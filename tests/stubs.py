# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-01
# Description: stubs.py - deterministic stand-ins for external providers
# -----------------------------------------------------------------------------
import asyncio
import hashlib
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

import settings
from embedding.EmbeddingProvider import EmbeddingKind
from record.ProfessionalRecord import ProfessionalRecord
from utility.errors import ProviderTransient

_TOKEN = re.compile(r"\w+", re.UNICODE)
_CONTEXT_NAME = re.compile(r"^- name: (?P<name>[^|]+?) \|", re.MULTILINE)


class HashingEmbedder:
    """Bag-of-words hashing embedder; identical text -> identical vector."""

    def __init__(self, dim: int = 64, fail_on: Sequence[str] = (), fail_queries: bool = False) -> None:
        self.dim = dim
        self.fail_on = tuple(fail_on)
        self.fail_queries = fail_queries
        self.calls: List[Tuple[str, EmbeddingKind]] = []

    def vector_for(self, text: str) -> List[float]:
        vec = np.zeros(self.dim, dtype=np.float32)
        for token in _TOKEN.findall(text.lower()):
            idx = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % self.dim
            vec[idx] += 1.0
        norm = np.linalg.norm(vec)
        if norm > 0:
            vec = vec / norm
        return vec.tolist()

    async def embed(self, text: str, kind: EmbeddingKind) -> List[float]:
        self.calls.append((text, kind))
        await asyncio.sleep(0)
        if kind == EmbeddingKind.QUERY and self.fail_queries:
            raise ProviderTransient("stub query embedding failure", provider="stub")
        if any(marker in text for marker in self.fail_on):
            raise ProviderTransient(f"stub embedding failure for {text[:30]!r}", provider="stub")
        return self.vector_for(text)


class MemoryRecordStore:
    def __init__(self, rows: Sequence[Dict[str, Any]] = ()) -> None:
        self.records = [ProfessionalRecord.from_dict(r) for r in rows]
        self.fail = False

    async def list_records(self) -> List[ProfessionalRecord]:
        await asyncio.sleep(0)
        if self.fail:
            raise OSError("stub record store unreadable")
        return list(self.records)

    async def save(self, fields: Dict[str, Any]) -> ProfessionalRecord:
        record = ProfessionalRecord.from_dict(fields)
        self.records = [r for r in self.records if r.id != record.id] + [record]
        return record

    async def delete(self, record_id: str) -> bool:
        before = len(self.records)
        self.records = [r for r in self.records if r.id != record_id]
        return len(self.records) != before


class ScriptedCompletion:
    """Yields fixed chunks; optionally raises after `fail_after` of them."""

    def __init__(self, chunks: Sequence[str], fail_after: Optional[int] = None) -> None:
        self.chunks = list(chunks)
        self.fail_after = fail_after
        self.requests: List[List[Dict[str, str]]] = []
        self.yielded = 0
        self.closed = False

    async def stream(self, messages):
        self.requests.append(list(messages))
        try:
            for i, chunk in enumerate(self.chunks):
                if self.fail_after is not None and i == self.fail_after:
                    raise ProviderTransient("stub stream broke", provider="stub")
                await asyncio.sleep(0)
                self.yielded += 1
                yield chunk
            if self.fail_after is not None and self.fail_after >= len(self.chunks):
                raise ProviderTransient("stub stream broke", provider="stub")
        finally:
            self.closed = True

    async def complete(self, messages) -> str:
        self.requests.append(list(messages))
        if self.fail_after is not None:
            raise ProviderTransient("stub completion failed", provider="stub")
        return "".join(self.chunks)


class GroundedCompletion:
    """
    Answers from the system message only: confirms a person whose context
    line is present and whose name the user mentions, otherwise takes the
    not-found branch with the contact text.
    """

    def __init__(self) -> None:
        self.requests: List[List[Dict[str, str]]] = []

    def _answer(self, messages) -> str:
        self.requests.append(list(messages))
        system = messages[0]["content"]
        question = messages[-1]["content"].lower()
        for match in _CONTEXT_NAME.finditer(system):
            name = match.group("name").strip()
            if name.lower() in question:
                return f"Sí, {name} está afiliado(a) al registro."
        return f"No figura en el registro activo. Comuníquese al {settings.CONTACT_TEXT}."

    async def stream(self, messages):
        answer = self._answer(messages)
        for word in answer.split(" "):
            await asyncio.sleep(0)
            yield word + " "

    async def complete(self, messages) -> str:
        return self._answer(messages)


ANA = {
    "id": "1",
    "name": "Ana Pérez",
    "specialty": "Neonatología",
    "registry": "RM123",
    "city": "Bucaramanga",
    "status": "active",
    "office": "Clínica X",
}

FIVE_RECORDS = [
    ANA,
    {"id": "2", "name": "Carlos Rueda", "specialty": "Pediatría general", "registry": "RM456",
     "city": "Floridablanca", "status": "active", "office": "Torre Médica 204"},
    {"id": "3", "name": "Lucía Gómez", "specialty": "Neumología pediátrica", "registry": "RM789",
     "city": "Girón", "status": "active", "office": "Hospital Regional"},
    {"id": "4", "name": "Mateo Castro", "specialty": "Cardiología pediátrica", "registry": "RM321",
     "city": "Piedecuesta", "status": "active", "office": "Clínica Y"},
    {"id": "5", "name": "Sofía Ardila", "specialty": "Infectología pediátrica", "registry": "RM654",
     "city": "Bucaramanga", "status": "inactive", "office": "Centro Z"},
]
