import httpx
from google import genai
from google.genai import errors, types

from carlisting.logging.logger import Log
from carlisting.parsing.client_base import DEFAULT_TEMPERATURE, TextCompletionProvider
from carlisting.parsing.exceptions import (
    EmptyResponseError,
    ProviderNetworkError,
    ProviderRequestError,
)
from carlisting.settings_store.models import AiProvider, ProviderCredentials

_UNAVAILABLE_CODES = frozenset({503, 504})


class GeminiClientAdapter(TextCompletionProvider):
    """Text-completion client built on the Google Gen AI SDK.

    A client is created per call from that call's credentials and closed
    afterwards, so overlapping calls never share an API key.
    """

    provider = AiProvider.GEMINI

    def __init__(
        self,
        *,
        model_name: str,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout_seconds: int | None = None,
    ) -> None:
        self._model_name = model_name
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds

    def complete(
        self,
        prompt: str,
        raw_text: str,
        credentials: ProviderCredentials,
    ) -> str:
        api_key = self._require_api_key(credentials)
        client = genai.Client(api_key=api_key, http_options=self._http_options())

        Log.debug(f"Sending request to Gemini ({self._model_name}) with prompt:\n{prompt}")
        try:
            response = client.models.generate_content(
                model=self._model_name,
                contents=types.Content(
                    role="user",
                    parts=[types.Part(text=prompt), types.Part(text=raw_text)],
                ),
                config=types.GenerateContentConfig(
                    temperature=self._temperature,
                    response_mime_type="application/json",
                ),
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderNetworkError(f"Gemini network error: {exc}") from exc
        except errors.APIError as exc:
            if exc.code in _UNAVAILABLE_CODES:
                raise ProviderNetworkError(f"Gemini network error: {exc}") from exc
            raise ProviderRequestError(
                exc.message or "Failed to get response from Gemini"
            ) from exc
        finally:
            client.close()

        text = response.text
        if not text or not text.strip():
            raise EmptyResponseError("No content in Gemini response")

        Log.debug(f"Raw Gemini response:\n{text}")
        return text

    def _http_options(self) -> types.HttpOptions:
        # One attempt only; the SDK must not retry on our behalf.
        retry_options = types.HttpRetryOptions(attempts=1)
        if self._timeout_seconds is None:
            return types.HttpOptions(retry_options=retry_options)
        return types.HttpOptions(
            timeout=self._timeout_seconds * 1000,
            retry_options=retry_options,
        )
