from dataclasses import dataclass, field
from enum import Enum


class AiProvider(str, Enum):
    """Selectable text-completion providers, valued by their stored tag."""

    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
    OPENROUTER = "openrouter"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    AiProvider.GEMINI: "Gemini",
    AiProvider.DEEPSEEK: "Deepseek",
    AiProvider.OPENROUTER: "OpenRouter",
}


@dataclass(frozen=True)
class ProviderCredentials:
    """API key and system prompt for one provider.

    ``site_url`` and ``site_name`` identify the calling site to OpenRouter
    and stay ``None`` for the other providers.
    """

    api_key: str = ""
    prompt: str = ""
    site_url: str | None = None
    site_name: str | None = None


@dataclass(frozen=True)
class SettingsBundle:
    """Resolved configuration for one parsing invocation."""

    provider: AiProvider
    gemini: ProviderCredentials = field(default_factory=ProviderCredentials)
    deepseek: ProviderCredentials = field(default_factory=ProviderCredentials)
    openrouter: ProviderCredentials = field(default_factory=ProviderCredentials)

    @property
    def active(self) -> ProviderCredentials:
        """Credentials of the currently selected provider."""
        return self.for_provider(self.provider)

    def for_provider(self, provider: AiProvider) -> ProviderCredentials:
        if provider is AiProvider.GEMINI:
            return self.gemini
        if provider is AiProvider.DEEPSEEK:
            return self.deepseek
        return self.openrouter
