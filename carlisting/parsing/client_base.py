from abc import ABC, abstractmethod
from typing import ClassVar

from carlisting.parsing.exceptions import CredentialMissingError
from carlisting.settings_store.models import AiProvider, ProviderCredentials

DEFAULT_TEMPERATURE = 0.3


class TextCompletionProvider(ABC):
    """Contract for provider-specific text-completion clients."""

    provider: ClassVar[AiProvider]

    @abstractmethod
    def complete(
        self,
        prompt: str,
        raw_text: str,
        credentials: ProviderCredentials,
    ) -> str:
        """Send the system prompt and raw text, return the model output text.

        Raises:
            CredentialMissingError: if the API key is blank. No request is made.
            ProviderRequestError: if the provider call fails.
            EmptyResponseError: if the reply carries no content.
        """

    @classmethod
    def _require_api_key(cls, credentials: ProviderCredentials) -> str:
        api_key = (credentials.api_key or "").strip()
        if not api_key:
            raise CredentialMissingError(f"{cls.provider.label} API key is required")
        return api_key
