# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Updated: 2026-01-31
# Description: api/schemas/chat.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field, field_validator


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)

    @field_validator("messages")
    @classmethod
    def _last_is_user(cls, v: List[ChatMessage]) -> List[ChatMessage]:
        if v[-1].role != "user":
            raise ValueError("the last message must come from the user")
        if not v[-1].content.strip():
            raise ValueError("the last user message must not be empty")
        return v

    def as_history(self) -> List[dict]:
        return [{"role": m.role, "content": m.content} for m in self.messages]


class ChatResponse(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str
