"""Configuration and status endpoints."""

from fastapi import APIRouter

from deafsim.api.models import ConfigStatus
from deafsim.config import get_settings
from deafsim.i18n import language_label, level_description

router = APIRouter()


@router.get("/config", response_model=ConfigStatus)
def get_config():
    """Get current configuration status without exposing the API key."""
    settings = get_settings()
    language = settings.language_mode

    return ConfigStatus(
        api_endpoint=settings.openai_url,
        model=settings.model,
        api_key_configured=bool(settings.openai_api_key),
        level=settings.deaf_level,
        level_description=level_description(settings.deaf_level, language),
        language=language,
        language_label=language_label(language),
        system_prompt_configured=settings.has_system_prompt,
    )
