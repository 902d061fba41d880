# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Updated: 2026-01-31
# Description: chat.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from api.dependencies import get_chat_service
from api.schemas.chat import ChatRequest, ChatResponse
from services.RegistryChatService import RegistryChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("")
async def post_chat_stream(
        req: ChatRequest,
        svc: RegistryChatService = Depends(get_chat_service),
) -> StreamingResponse:
    history = req.as_history()
    logger.info("POST /chat (start) turns=%d last_len=%d", len(history), len(history[-1]["content"]))

    # StreamingResponse stops iterating (and closes the generator) when the client disconnects
    return StreamingResponse(
        svc.stream_answer(history),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )


@router.post("/answer", response_model=ChatResponse)
async def post_chat_answer(
        req: ChatRequest,
        svc: RegistryChatService = Depends(get_chat_service),
) -> ChatResponse:
    history = req.as_history()
    logger.info("POST /chat/answer (start) turns=%d", len(history))

    out = await svc.answer(history)

    logger.info("POST /chat/answer (done) answer_len=%d", len(out["content"]))
    return ChatResponse(content=out["content"])
