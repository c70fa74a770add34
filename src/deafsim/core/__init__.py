"""Conversation orchestration around the simulator and chat client."""

from deafsim.core.conversation import ChatTurn, Conversation, SessionStore

__all__ = ["ChatTurn", "Conversation", "SessionStore"]
