"""Chat endpoints: degrade the user's message, then ask the model."""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse
from starlette.concurrency import iterate_in_threadpool, run_in_threadpool

from deafsim.api.deps import get_session_store
from deafsim.api.models import ChatRequest, ChatResponse, DegradationResponse
from deafsim.core import SessionStore
from deafsim.llm.client import ChatClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest, store: SessionStore = Depends(get_session_store)):
    """Send a degraded message and return the model's reply."""
    conversation = store.get_or_create(request.session_id)
    with conversation.lock:
        conversation.reconfigure(level=request.level, language=request.language)
        result = conversation.hear(request.message)
        try:
            response = conversation.reply()
        except ChatClientError as e:
            logger.error("Chat error for session %s: %s", request.session_id, e)
            raise HTTPException(status_code=502, detail=str(e))

    return ChatResponse(
        original=result.original,
        degraded=result.degraded,
        loss_percentage=result.loss_percentage,
        response=response,
    )


@router.post("/chat/stream")
async def chat_stream(request: ChatRequest, store: SessionStore = Depends(get_session_store)):
    """Degrade a message and stream the reply as server-sent events.

    Emits one ``heard`` event, then ``chunk`` events, then ``done`` (or
    ``error``). The session stays locked until the stream ends.
    """
    conversation = store.get_or_create(request.session_id)

    async def event_generator():
        await run_in_threadpool(conversation.lock.acquire)
        try:
            conversation.reconfigure(level=request.level, language=request.language)
            result = conversation.hear(request.message)
            heard = DegradationResponse.from_result(result).model_dump(by_alias=True)
            yield {"event": "heard", "data": json.dumps(heard)}

            parts = []
            try:
                async for chunk in iterate_in_threadpool(conversation.reply_stream()):
                    parts.append(chunk)
                    yield {"event": "chunk", "data": json.dumps({"content": chunk})}
            except ChatClientError as e:
                logger.error("Streaming chat error for session %s: %s", request.session_id, e)
                yield {"event": "error", "data": json.dumps({"detail": str(e)})}
                return
            yield {"event": "done", "data": json.dumps({"response": "".join(parts)})}
        finally:
            conversation.lock.release()

    return EventSourceResponse(event_generator())


@router.delete("/sessions/{session_id}")
def drop_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Forget a session and its history."""
    if not store.drop(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return {"ok": True}
