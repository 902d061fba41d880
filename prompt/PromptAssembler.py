# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: PromptAssembler
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

import settings
from prompt.CompletionRequest import CompletionRequest, Message
from prompt.DisclosurePolicy import DisclosurePolicy
from record.ProfessionalRecord import STATUS_INACTIVE
from utility.logging_utils import get_class_logger

TRUNCATION_MARKER = "…"

# (payload key, label shown to the model)
_CONTEXT_FIELDS = (
    ("name", "name"),
    ("specialty", "specialty"),
    ("registry_number", "registry"),
    ("city", "city"),
    ("office", "office"),
)


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x)


def truncate_keep_tail(text: str, max_chars: int) -> str:
    """
    Cap text at max_chars, dropping the oldest content and keeping the end.
    A marker replaces the dropped prefix; the result never exceeds max_chars.
    """
    if len(text) <= max_chars:
        return text
    if max_chars <= len(TRUNCATION_MARKER):
        return text[-max_chars:]
    return TRUNCATION_MARKER + text[-(max_chars - len(TRUNCATION_MARKER)):]


@dataclass
class PromptAssembler:
    """
    Stateless transform: retrieved payloads + conversation + policy
    -> one ordered message list (instructions first, then history,
    ending with the current user message).
    """
    history_max_chars: int = settings.HISTORY_MESSAGE_MAX_CHARS
    history_max_messages: int = settings.HISTORY_MAX_MESSAGES
    max_context_chars: int = settings.MAX_CONTEXT_CHARS
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        if self.history_max_messages < 1:
            raise ValueError("history_max_messages must be >= 1 to keep the current user message")

    def assemble(
            self,
            retrieved: Sequence[Any],
            history: Sequence[Mapping[str, str]],
            policy: DisclosurePolicy,
    ) -> CompletionRequest:
        conversation = self._normalise_history(history)
        latest = conversation[-1]["content"]

        payloads = [self._payload_of(item) for item in retrieved]
        if not policy.include_inactive:
            payloads = [p for p in payloads if _safe_str(p.get("status")).lower() != STATUS_INACTIVE]

        context_block, used_ids = self._build_context_block(payloads)

        escalated = policy.requests_full_roster(latest) or policy.requests_bypass(latest)

        system_parts = [
            policy.instruction_block(),
            "REGISTRY RECORDS:",
            context_block or "(no matching records)",
        ]
        if escalated:
            system_parts.append("")
            system_parts.append(policy.refusal_note())

        messages: List[Message] = [{"role": "system", "content": "\n".join(system_parts)}]
        messages.extend(conversation)

        self.logger.debug(
            "assemble: records=%d context_chars=%d history=%d escalated=%s",
            len(used_ids),
            len(context_block),
            len(conversation),
            escalated,
        )

        return CompletionRequest(
            messages=messages,
            context_block=context_block,
            record_ids=tuple(used_ids),
            policy_escalated=escalated,
        )

    # -------------------------------------------------------------------------
    @staticmethod
    def _payload_of(item: Any) -> Mapping[str, Any]:
        payload = getattr(item, "payload", item)
        if not isinstance(payload, Mapping):
            raise TypeError(f"retrieved item has no mapping payload: {type(item).__name__}")
        return payload

    def _normalise_history(self, history: Sequence[Mapping[str, str]]) -> List[Message]:
        if not history:
            raise ValueError("history must contain at least the current user message")

        conversation: List[Message] = []
        for m in history:
            role = "assistant" if m.get("role") == "assistant" else "user"
            content = _safe_str(m.get("content"))
            conversation.append({"role": role, "content": truncate_keep_tail(content, self.history_max_chars)})

        if conversation[-1]["role"] != "user" or not conversation[-1]["content"].strip():
            raise ValueError("the last message must be a non-empty user message")

        if len(conversation) > self.history_max_messages:
            dropped = len(conversation) - self.history_max_messages
            conversation = conversation[dropped:]
            self.logger.debug("assemble: dropped %d oldest history messages", dropped)

        return conversation

    def _build_context_block(self, payloads: Sequence[Mapping[str, Any]]) -> tuple:
        """
        One compact line per record, grounding fields only, bounded by max_context_chars.
        """
        lines: List[str] = []
        used_ids: List[str] = []
        total = 0

        for p in payloads:
            line = "- " + " | ".join(
                f"{label}: {_safe_str(p.get(key))}" for key, label in _CONTEXT_FIELDS
            )

            if total + len(line) + 1 > self.max_context_chars:
                self.logger.warning(
                    "_build_context_block: truncating context at %d chars (limit=%d)",
                    total,
                    self.max_context_chars,
                )
                break

            lines.append(line)
            used_ids.append(_safe_str(p.get("id")))
            total += len(line) + 1

        return "\n".join(lines), used_ids
