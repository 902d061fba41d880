# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: CompletionRequest
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, List, Tuple

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass(frozen=True)
class CompletionRequest:
    messages: List[Message]
    context_block: str = ""
    record_ids: Tuple[str, ...] = ()
    policy_escalated: bool = False

    @property
    def system_message(self) -> str:
        return self.messages[0]["content"] if self.messages else ""
