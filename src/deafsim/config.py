"""Configuration and environment loading."""

import logging

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from deafsim.constants import DEFAULT_LEVEL, Language
from deafsim.language import InvalidConfiguration, resolve_language

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE: Language = "english"


def normalize_language(tag: str | None) -> Language:
    """Resolve a language tag, falling back to English when unrecognized."""
    if not tag:
        return DEFAULT_LANGUAGE
    try:
        return resolve_language(tag)
    except InvalidConfiguration:
        logger.warning('Invalid language "%s", defaulting to "en"', tag)
        return DEFAULT_LANGUAGE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI-compatible endpoint
    openai_url: str = Field(default="http://127.0.0.1:8080/v1", alias="OPENAI_URL")
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    model: str = Field(default="default", alias="MODEL")
    system_prompt: str | None = Field(default=None, alias="SYSTEM_PROMPT")

    # Simulation
    deaf_level: int = Field(default=DEFAULT_LEVEL, alias="DEAF_LEVEL")
    language: str = Field(default="en", alias="LANGUAGE")

    # Web UI
    web_port: int = Field(default=3000, alias="WEB_PORT")
    dev_port: int | None = Field(default=None, alias="DEV_PORT")

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @field_validator("system_prompt")
    @classmethod
    def _blank_prompt_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def language_mode(self) -> Language:
        """Configured language with invalid tags mapped to English."""
        return normalize_language(self.language)

    @property
    def dev_server_port(self) -> int:
        """Dev server port, one above the web port unless set."""
        return self.dev_port if self.dev_port is not None else self.web_port + 1

    @property
    def has_system_prompt(self) -> bool:
        return bool(self.system_prompt)


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
