"""Chat endpoints: complete replies and Server-Sent Events streaming."""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from pdf_chat.agent.chat_agent import AgentService, AgentServiceError
from pdf_chat.api.deps import get_chat_service
from pdf_chat.models.schemas import ChatRequest, ChatResponse, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


def _describe(request: ChatRequest) -> str:
    doc = f", document={request.document.filename}" if request.document else ""
    return f"session={request.session_id or '-'}, history={len(request.history)}{doc}"


async def _event_stream(
    request: ChatRequest, service: AgentService
) -> AsyncGenerator[str]:
    """Translate the reply stream into SSE frames.

    Always ends with exactly one ``done=true`` chunk.
    """
    yield _sse(StreamChunk(content="", done=False, status=StreamStatus.RECEIVED))
    if request.document is not None:
        yield _sse(StreamChunk(content="", done=False, status=StreamStatus.READING))

    try:
        async for content in service.stream_reply(request):
            yield _sse(
                StreamChunk(content=content, done=False, status=StreamStatus.GENERATING)
            )
    except AgentServiceError as e:
        logger.warning(f"Streaming reply failed ({_describe(request)}): {e}")
        yield _sse(
            StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e))
        )
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    service: AgentService = Depends(get_chat_service),
) -> ChatResponse:
    """Return the complete reply for a message.

    Raises:
        422: Empty or missing message.
        502: The generation API failed.
        503: No LLM backend configured.
    """
    logger.info(f"Chat request ({_describe(request)})")
    try:
        reply = await service.get_reply(request)
    except AgentServiceError as e:
        logger.warning(f"Chat reply failed ({_describe(request)}): {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Generation failed: {e}",
        ) from e

    return ChatResponse(reply=reply, session_id=request.session_id)


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    service: AgentService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream the reply as Server-Sent Events of StreamChunk JSON."""
    logger.info(f"Streaming chat request ({_describe(request)})")
    return StreamingResponse(
        _event_stream(request, service),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
