from carlisting.config.settings import Settings
from carlisting.parsing.client_base import TextCompletionProvider
from carlisting.parsing.gemini_client_adapter import GeminiClientAdapter
from carlisting.parsing.openai_client_adapter import (
    DeepseekClientAdapter,
    OpenRouterClientAdapter,
)
from carlisting.settings_store.models import AiProvider


class ProviderFactory:
    """Creates text-completion providers from application settings."""

    @classmethod
    def create(cls, provider: AiProvider, settings: Settings) -> TextCompletionProvider:
        """Create the client for a single provider."""
        if provider is AiProvider.GEMINI:
            return GeminiClientAdapter(
                model_name=settings.gemini_model_name,
                temperature=settings.provider_temperature,
                timeout_seconds=settings.provider_timeout_seconds,
            )
        if provider is AiProvider.DEEPSEEK:
            return DeepseekClientAdapter(
                model_name=settings.deepseek_model_name,
                base_url=settings.deepseek_base_url,
                temperature=settings.provider_temperature,
                timeout_seconds=settings.provider_timeout_seconds,
            )
        if provider is AiProvider.OPENROUTER:
            return OpenRouterClientAdapter(
                model_name=settings.openrouter_model_name,
                base_url=settings.openrouter_base_url,
                fallback_models=settings.openrouter_fallback_models,
                temperature=settings.provider_temperature,
                timeout_seconds=settings.provider_timeout_seconds,
            )
        raise ValueError(f"Unknown AI provider '{provider}'")

    @classmethod
    def create_all(cls, settings: Settings) -> dict[AiProvider, TextCompletionProvider]:
        """Create one client per supported provider."""
        return {provider: cls.create(provider, settings) for provider in AiProvider}
