"""Dependency injection for FastAPI routes."""

from functools import lru_cache

from deafsim.core import SessionStore
from deafsim.llm.client import ChatClient


@lru_cache
def get_session_store() -> SessionStore:
    """Get the process-wide session store."""
    return SessionStore()


def get_chat_client() -> ChatClient:
    """A client on the configured endpoint and default model."""
    return ChatClient()
