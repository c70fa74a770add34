"""Model discovery and selection endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from deafsim.api.deps import get_chat_client, get_session_store
from deafsim.api.models import ModelSelection
from deafsim.core import SessionStore
from deafsim.llm.client import ChatClient, ChatClientError, ModelInfo

router = APIRouter()


@router.get("/models", response_model=list[ModelInfo])
def list_models(client: ChatClient = Depends(get_chat_client)):
    """List the models offered by the configured endpoint."""
    try:
        return client.list_models()
    except ChatClientError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/model")
def select_model(
    request: ModelSelection,
    store: SessionStore = Depends(get_session_store),
):
    """Switch the model used by one session."""
    store.get_or_create(request.session_id).client.model = request.model
    return {"ok": True}
