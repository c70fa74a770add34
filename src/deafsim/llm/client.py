"""Client for OpenAI-compatible chat completion endpoints."""

import logging
from collections.abc import Iterable, Iterator
from typing import Literal

import openai
from pydantic import BaseModel

from deafsim.config import Settings, get_settings

logger = logging.getLogger(__name__)

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """One turn of a chat-style conversation."""

    role: Role
    content: str


class ModelInfo(BaseModel):
    """A model advertised by the endpoint's /models listing."""

    id: str
    object: str = "model"
    created: int | None = None
    owned_by: str | None = None


class ChatClientError(Exception):
    """Error talking to the chat completion endpoint."""
    pass


class ChatClient:
    """Chat client for any endpoint speaking the OpenAI API."""

    def __init__(self, settings: Settings | None = None, model: str | None = None):
        self.settings = settings or get_settings()
        self._model = model or self.settings.model
        self._client: openai.OpenAI | None = None

    @property
    def base_url(self) -> str:
        return self.settings.openai_url

    @property
    def model(self) -> str:
        return self._model

    @model.setter
    def model(self, value: str) -> None:
        self._model = value

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            # Local servers usually ignore the key, but the SDK requires one
            self._client = openai.OpenAI(
                base_url=self.base_url,
                api_key=self.settings.openai_api_key or "not-needed",
            )
        return self._client

    @staticmethod
    def _payload(messages: Iterable[ChatMessage]) -> list[dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in messages]

    def list_models(self) -> list[ModelInfo]:
        """Discover the models available at the endpoint."""
        try:
            page = self._get_client().models.list()
        except openai.OpenAIError as e:
            raise ChatClientError(f"Model discovery failed: {e}") from e

        models = []
        for item in page.data or []:
            models.append(ModelInfo(
                id=item.id,
                object=getattr(item, "object", "model") or "model",
                created=getattr(item, "created", None),
                owned_by=getattr(item, "owned_by", None),
            ))
        return models

    def chat(self, messages: Iterable[ChatMessage]) -> str:
        """Send a chat completion request and return the reply text."""
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=self._payload(messages),
                stream=False,
            )
        except openai.OpenAIError as e:
            logger.error("Chat request to %s failed: %s", self.base_url, e)
            raise ChatClientError(f"Chat request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def chat_stream(self, messages: Iterable[ChatMessage]) -> Iterator[str]:
        """Stream a chat completion, yielding content deltas as they arrive."""
        try:
            stream = self._get_client().chat.completions.create(
                model=self.model,
                messages=self._payload(messages),
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except openai.OpenAIError as e:
            logger.error("Streaming chat request to %s failed: %s", self.base_url, e)
            raise ChatClientError(f"Chat request failed: {e}") from e
