"""LLM provider factory."""

from cosmos.core.config import Settings
from cosmos.services.llm.base import BaseLLMProvider


def get_llm_provider(settings: Settings) -> BaseLLMProvider:
    """Factory function that returns the provider selected by the given settings."""
    if settings.llm_provider == "openai":
        from cosmos.services.llm.openai import OpenAIProvider
        return OpenAIProvider(api_key=settings.openai_api_key, model=settings.llm_model)
    elif settings.llm_provider == "gemini":
        from cosmos.services.llm.gemini import GeminiProvider
        return GeminiProvider(api_key=settings.gemini_api_key, model=settings.llm_model)
    else:
        raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")
