"""Conversation state: what the model heard and what it answered."""

import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from deafsim.config import Settings, get_settings, normalize_language
from deafsim.hearing import DegradationResult, HearingLossSimulator
from deafsim.llm.client import ChatClient, ChatMessage

logger = logging.getLogger(__name__)


@dataclass
class ChatTurn:
    """A degraded user message and the model's reply to it."""

    result: DegradationResult
    response: str


class Conversation:
    """One chat session with a hard-of-hearing model.

    User messages pass through the simulator; only the degraded text enters
    the history sent to the endpoint.

    Callers that share a conversation across threads hold ``lock`` for a
    whole turn, from reconfigure to the recorded reply.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        simulator: HearingLossSimulator | None = None,
        client: ChatClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.simulator = simulator or HearingLossSimulator(
            level=self.settings.deaf_level,
            language=self.settings.language_mode,
        )
        self.client = client or ChatClient(self.settings)
        self.history: list[ChatMessage] = self._initial_history()
        self.lock = threading.Lock()

    def _initial_history(self) -> list[ChatMessage]:
        if self.settings.system_prompt:
            return [ChatMessage(role="system", content=self.settings.system_prompt)]
        return []

    def reconfigure(self, level: int | None = None, language: str | None = None) -> bool:
        """Swap the simulator when level or language changes.

        Unrecognized language tags fall back to English. Returns True if
        a new simulator was created.
        """
        simulator = self.simulator
        if level is not None and level != simulator.level:
            simulator = simulator.with_level(level)
        if language is not None:
            mode = normalize_language(language)
            if mode != simulator.language:
                simulator = simulator.with_language(mode)

        changed = simulator is not self.simulator
        self.simulator = simulator
        return changed

    def reset(self) -> None:
        """Forget the conversation, keeping the system prompt."""
        self.history = self._initial_history()

    def hear(self, message: str) -> DegradationResult:
        """Degrade a user message and record it as the next user turn."""
        result = self.simulator.transform(message)
        self.history.append(ChatMessage(role="user", content=result.degraded))
        return result

    def reply(self) -> str:
        response = self.client.chat(self.history)
        self.history.append(ChatMessage(role="assistant", content=response))
        return response

    def reply_stream(self) -> Iterator[str]:
        """Stream the model's reply, recording it once complete."""
        parts: list[str] = []
        for chunk in self.client.chat_stream(self.history):
            parts.append(chunk)
            yield chunk
        self.history.append(ChatMessage(role="assistant", content="".join(parts)))

    def send(self, message: str) -> ChatTurn:
        result = self.hear(message)
        return ChatTurn(result=result, response=self.reply())


class SessionStore:
    """In-memory conversations keyed by session id."""

    def __init__(self, factory: Callable[[], Conversation] | None = None):
        self._factory = factory or Conversation
        self._sessions: dict[str, Conversation] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> Conversation:
        with self._lock:
            conversation = self._sessions.get(session_id)
            if conversation is None:
                logger.debug("Creating session %s", session_id)
                conversation = self._factory()
                self._sessions[session_id] = conversation
            return conversation

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
