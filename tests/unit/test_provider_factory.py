"""Tests for ProviderFactory."""

from carlisting.config.settings import Settings
from carlisting.parsing.client_base import TextCompletionProvider
from carlisting.parsing.factory import ProviderFactory
from carlisting.parsing.gemini_client_adapter import GeminiClientAdapter
from carlisting.parsing.openai_client_adapter import (
    DeepseekClientAdapter,
    OpenRouterClientAdapter,
)
from carlisting.settings_store.models import AiProvider


class TestProviderFactory:
    def test_creates_gemini_adapter(self) -> None:
        client = ProviderFactory.create(AiProvider.GEMINI, Settings())
        assert isinstance(client, GeminiClientAdapter)
        assert client.provider is AiProvider.GEMINI

    def test_creates_deepseek_adapter(self) -> None:
        client = ProviderFactory.create(AiProvider.DEEPSEEK, Settings())
        assert isinstance(client, DeepseekClientAdapter)
        assert client.provider is AiProvider.DEEPSEEK

    def test_creates_openrouter_adapter(self) -> None:
        client = ProviderFactory.create(AiProvider.OPENROUTER, Settings())
        assert isinstance(client, OpenRouterClientAdapter)
        assert client.provider is AiProvider.OPENROUTER

    def test_openrouter_uses_configured_fallbacks(self) -> None:
        settings = Settings(openrouter_fallback_models=["x/y"])
        client = ProviderFactory.create(AiProvider.OPENROUTER, settings)
        assert client._extra_body() == {"fallbacks": ["x/y"]}  # noqa: SLF001

    def test_create_all_covers_every_provider(self) -> None:
        clients = ProviderFactory.create_all(Settings())
        assert set(clients) == set(AiProvider)
        assert all(isinstance(c, TextCompletionProvider) for c in clients.values())
        assert all(provider is client.provider for provider, client in clients.items())
