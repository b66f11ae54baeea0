from collections.abc import Mapping
from typing import Any

import httpx
import openai

from carlisting.logging.logger import Log
from carlisting.parsing.client_base import DEFAULT_TEMPERATURE, TextCompletionProvider
from carlisting.parsing.exceptions import (
    EmptyResponseError,
    ProviderNetworkError,
    ProviderRequestError,
)
from carlisting.settings_store.models import AiProvider, ProviderCredentials


class OpenAICompatibleClientAdapter(TextCompletionProvider):
    """Text-completion client for providers exposing an OpenAI-compatible chat API.

    The SDK client is built per call, because the API key comes with the
    call, and is closed once the call returns. SDK retries are disabled.
    """

    def __init__(
        self,
        *,
        model_name: str,
        base_url: str,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout_seconds: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._model_name = model_name
        self._base_url = base_url
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def complete(
        self,
        prompt: str,
        raw_text: str,
        credentials: ProviderCredentials,
    ) -> str:
        api_key = self._require_api_key(credentials)
        client = self._create_client(api_key)
        label = self.provider.label

        Log.debug(f"Sending request to {label} ({self._model_name}) with prompt:\n{prompt}")
        try:
            response = client.chat.completions.create(
                model=self._model_name,
                temperature=self._temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": prompt},
                    {"role": "user", "content": raw_text},
                ],
                extra_headers=self._extra_headers(credentials),
                extra_body=self._extra_body(),
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderNetworkError(f"{label} network error: {exc}") from exc
        except openai.APIStatusError as exc:
            Log.error(f"{label} error response: {exc.body}")
            raise ProviderRequestError(self._error_message(exc)) from exc
        except openai.APIError as exc:
            raise ProviderRequestError(self._error_message(exc)) from exc
        finally:
            client.close()

        if not response.choices:
            raise EmptyResponseError(f"No content in {label} response")
        content = response.choices[0].message.content
        if not content:
            raise EmptyResponseError(f"No content in {label} response")

        Log.debug(f"{label} content:\n{content}")
        return content

    def _create_client(self, api_key: str) -> openai.OpenAI:
        options: dict[str, Any] = {
            "api_key": api_key,
            "base_url": self._base_url,
            "max_retries": 0,
        }
        if self._timeout_seconds is not None:
            options["timeout"] = self._timeout_seconds
        if self._transport is not None:
            options["http_client"] = httpx.Client(transport=self._transport)
        return openai.OpenAI(**options)

    def _extra_headers(self, credentials: ProviderCredentials) -> dict[str, str] | None:
        return None

    def _extra_body(self) -> dict[str, Any] | None:
        return None

    def _error_message(self, exc: openai.APIError) -> str:
        body = exc.body
        if isinstance(body, Mapping):
            nested = body.get("error")
            if isinstance(nested, Mapping):
                body = nested
            message = body.get("message")
            if message:
                return str(message)
        return f"Failed to get response from {self.provider.label}"


class DeepseekClientAdapter(OpenAICompatibleClientAdapter):
    """Deepseek chat-completions client."""

    provider = AiProvider.DEEPSEEK


class OpenRouterClientAdapter(OpenAICompatibleClientAdapter):
    """OpenRouter chat-completions client.

    Sends the calling site's identity in the ``HTTP-Referer`` and ``X-Title``
    headers and asks OpenRouter to fall back to alternate models.
    """

    provider = AiProvider.OPENROUTER

    def __init__(
        self,
        *,
        model_name: str,
        base_url: str,
        fallback_models: list[str],
        temperature: float = DEFAULT_TEMPERATURE,
        timeout_seconds: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(
            model_name=model_name,
            base_url=base_url,
            temperature=temperature,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )
        self._fallback_models = list(fallback_models)

    def _extra_headers(self, credentials: ProviderCredentials) -> dict[str, str] | None:
        headers: dict[str, str] = {}
        if credentials.site_url:
            headers["HTTP-Referer"] = credentials.site_url
        if credentials.site_name:
            headers["X-Title"] = credentials.site_name
        return headers

    def _extra_body(self) -> dict[str, Any] | None:
        return {"fallbacks": self._fallback_models}
