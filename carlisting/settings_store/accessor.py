"""Reads and writes AI provider settings through the settings store."""

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor

from carlisting.logging.logger import Log
from carlisting.settings_store.base import BaseSettingsStore
from carlisting.settings_store.exceptions import (
    SettingsLoadError,
    SettingsSaveError,
    SettingsStoreError,
    UnknownProviderError,
)
from carlisting.settings_store.models import AiProvider, ProviderCredentials, SettingsBundle

_DEFAULT_PROVIDER = AiProvider.GEMINI


class SettingsAccessor:
    """Loads the settings bundle used by the listing parser.

    Reads that belong to the same tier are issued concurrently and merged
    once all of them have completed; any failed read fails the whole load.
    """

    def __init__(
        self,
        store: BaseSettingsStore,
        *,
        default_site_url: str,
        default_site_name: str,
        max_workers: int = 4,
    ) -> None:
        self._store = store
        self._default_site_url = default_site_url
        self._default_site_name = default_site_name
        self._max_workers = max(1, max_workers)

    def load(self) -> SettingsBundle:
        """Load the active provider and that provider's credentials.

        Raises:
            UnknownProviderError: if the stored provider tag is not recognized.
            SettingsLoadError: if any settings call fails.
        """
        try:
            provider = self._parse_provider(self._store.call("get_ai_provider"))
            values = self._fetch_all(self._getters_for(provider))
        except UnknownProviderError as exc:
            Log.error(f"Failed to load settings: {exc}")
            raise
        except SettingsStoreError as exc:
            Log.error(f"Failed to load settings: {exc}")
            raise SettingsLoadError(f"Failed to load AI settings: {exc}") from exc

        Log.info(f"Loaded settings for AI provider {provider.value}")
        credentials = self._build_credentials(provider, values)
        if provider is AiProvider.GEMINI:
            return SettingsBundle(provider=provider, gemini=credentials)
        if provider is AiProvider.DEEPSEEK:
            return SettingsBundle(provider=provider, deepseek=credentials)
        return SettingsBundle(provider=provider, openrouter=credentials)

    def load_all(self) -> SettingsBundle:
        """Load every provider's settings at once, for the admin screen."""
        getters = ["get_ai_provider"]
        for provider in AiProvider:
            getters.extend(self._getters_for(provider))
        try:
            values = self._fetch_all(getters)
            provider = self._parse_provider(values["get_ai_provider"])
        except UnknownProviderError as exc:
            Log.error(f"Failed to load settings: {exc}")
            raise
        except SettingsStoreError as exc:
            Log.error(f"Failed to load settings: {exc}")
            raise SettingsLoadError(f"Failed to load AI settings: {exc}") from exc

        return SettingsBundle(
            provider=provider,
            gemini=self._build_credentials(AiProvider.GEMINI, values),
            deepseek=self._build_credentials(AiProvider.DEEPSEEK, values),
            openrouter=self._build_credentials(AiProvider.OPENROUTER, values),
        )

    def save_provider_settings(
        self,
        provider: AiProvider,
        credentials: ProviderCredentials,
    ) -> None:
        """Write one provider's key and prompt (and OpenRouter site identity)."""
        prefix = provider.value
        writes = {
            f"set_{prefix}_apikey": credentials.api_key,
            f"set_{prefix}_prompt": credentials.prompt,
        }
        if provider is AiProvider.OPENROUTER:
            writes["set_openrouter_site_url"] = credentials.site_url or ""
            writes["set_openrouter_site_name"] = credentials.site_name or ""

        try:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = [
                    executor.submit(self._store.call, function, value)
                    for function, value in writes.items()
                ]
                for future in futures:
                    future.result()
        except SettingsStoreError as exc:
            Log.error(f"Failed to save {provider.label} settings: {exc}")
            raise SettingsSaveError(f"Failed to save {provider.label} settings: {exc}") from exc
        Log.info(f"Saved {provider.label} settings")

    def set_active_provider(self, provider: AiProvider) -> None:
        """Switch the provider used for subsequent parsing calls."""
        try:
            self._store.call("set_ai_provider", provider.value)
        except SettingsStoreError as exc:
            Log.error(f"Failed to update AI provider: {exc}")
            raise SettingsSaveError(f"Failed to update AI provider: {exc}") from exc
        Log.info(f"Switched to {provider.value} provider")

    def _fetch_all(self, functions: list[str]) -> dict[str, str | None]:
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {name: executor.submit(self._store.call, name) for name in functions}
            return {name: future.result() for name, future in futures.items()}

    @staticmethod
    def _getters_for(provider: AiProvider) -> list[str]:
        prefix = provider.value
        getters = [f"get_{prefix}_apikey", f"get_{prefix}_prompt"]
        if provider is AiProvider.OPENROUTER:
            getters.extend(["get_openrouter_site_url", "get_openrouter_site_name"])
        return getters

    @staticmethod
    def _parse_provider(raw: str | None) -> AiProvider:
        if raw is None or not raw.strip():
            return _DEFAULT_PROVIDER
        try:
            return AiProvider(raw.strip().lower())
        except ValueError as exc:
            raise UnknownProviderError(f"Unknown AI provider: {raw}") from exc

    def _build_credentials(
        self,
        provider: AiProvider,
        values: Mapping[str, str | None],
    ) -> ProviderCredentials:
        prefix = provider.value
        api_key = values.get(f"get_{prefix}_apikey") or ""
        prompt = values.get(f"get_{prefix}_prompt") or ""
        if provider is not AiProvider.OPENROUTER:
            return ProviderCredentials(api_key=api_key, prompt=prompt)
        return ProviderCredentials(
            api_key=api_key,
            prompt=prompt,
            site_url=_or_default(values.get("get_openrouter_site_url"), self._default_site_url),
            site_name=_or_default(
                values.get("get_openrouter_site_name"), self._default_site_name
            ),
        )


def _or_default(value: str | None, default: str) -> str:
    if value is None or not value.strip():
        return default
    return value.strip()
