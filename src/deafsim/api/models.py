"""API request/response models."""

from pydantic import BaseModel, Field

from deafsim.constants import DEFAULT_LEVEL
from deafsim.hearing import DegradationResult


class ConfigStatus(BaseModel):
    """Current configuration status."""

    api_endpoint: str
    model: str
    api_key_configured: bool
    level: int
    level_description: str
    language: str
    language_label: str
    system_prompt_configured: bool


class SimulateRequest(BaseModel):
    """Degrade text without contacting the chat endpoint."""

    text: str
    level: int = DEFAULT_LEVEL
    language: str = "en"
    seed: int | None = None


class DegradationResponse(BaseModel):
    """What the listener heard."""

    original: str
    degraded: str
    loss_percentage: int = Field(serialization_alias="lossPercentage")

    @classmethod
    def from_result(cls, result: DegradationResult) -> "DegradationResponse":
        return cls(
            original=result.original,
            degraded=result.degraded,
            loss_percentage=result.loss_percentage,
        )


class ChatRequest(BaseModel):
    """A user message for a session."""

    session_id: str = Field(alias="sessionId")
    message: str
    level: int = DEFAULT_LEVEL
    language: str = "en"

    model_config = {"populate_by_name": True}


class ChatResponse(DegradationResponse):
    """Degraded message plus the model's reply."""

    response: str


class ModelSelection(BaseModel):
    """Choose the model used by one session."""

    session_id: str = Field(alias="sessionId")
    model: str

    model_config = {"populate_by_name": True}

