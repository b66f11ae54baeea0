"""AI-powered car listing parser."""

from collections.abc import Mapping
from typing import Any

from carlisting.logging.logger import Log
from carlisting.parsing.client_base import TextCompletionProvider
from carlisting.parsing.exceptions import (
    CredentialMissingError,
    NoDataError,
    NoValidListingsError,
    ProviderConfigurationError,
)
from carlisting.parsing.response_parser import parse_response
from carlisting.parsing.validator import is_valid_listing
from carlisting.settings_store.accessor import SettingsAccessor
from carlisting.settings_store.models import AiProvider, ProviderCredentials


class CarListingParser:
    """Parses unstructured text into validated car listings.

    Pipeline: load settings -> select provider -> complete -> normalize -> validate.
    Holds no per-call state; concurrent calls each load their own settings.
    """

    def __init__(
        self,
        *,
        settings_accessor: SettingsAccessor,
        providers: Mapping[AiProvider, TextCompletionProvider],
    ) -> None:
        self._settings_accessor = settings_accessor
        self._providers = dict(providers)

    def parse(self, raw_text: str) -> list[dict[str, Any]]:
        """Return the validated listings found in ``raw_text``.

        Raises:
            NoDataError: if ``raw_text`` is blank. No remote call is made.
            SettingsLoadError: if the settings cannot be loaded.
            ListingParseError: for provider, format and validation failures.
        """
        if not raw_text or not raw_text.strip():
            raise NoDataError("No data provided")

        try:
            bundle = self._settings_accessor.load()
            Log.info(f"Using AI provider: {bundle.provider.value}")
            provider = self._select_provider(bundle.provider)
            candidates = self._parse_with(provider, raw_text, bundle.active)

            listings = [c for c in candidates if is_valid_listing(c)]
            Log.info(f"Validated {len(listings)} of {len(candidates)} listings")
            if not listings:
                raise NoValidListingsError("No valid listings found in the response")
        except Exception as exc:
            Log.error(f"Error parsing car listing: {exc}")
            raise
        return listings

    def _select_provider(self, provider: AiProvider) -> TextCompletionProvider:
        client = self._providers.get(provider)
        if client is None:
            raise ProviderConfigurationError(f"No client configured for {provider.label}")
        return client

    @staticmethod
    def _parse_with(
        client: TextCompletionProvider,
        raw_text: str,
        credentials: ProviderCredentials,
    ) -> list[Any]:
        label = client.provider.label
        if not credentials.api_key.strip():
            raise CredentialMissingError(f"{label} API key is required")
        if not credentials.prompt.strip():
            raise ProviderConfigurationError(f"{label} prompt is required")

        Log.debug(f"Raw data:\n{raw_text}")
        text = client.complete(credentials.prompt, raw_text, credentials)
        return parse_response(text)
