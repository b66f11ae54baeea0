"""Integration tests for the full parsing pipeline.

Wires the real settings accessor, REST settings store, provider factory and
parser together. The settings endpoint is served by ``httpx.MockTransport``
and the provider SDKs are patched, so no network access is needed.
"""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest

from carlisting.config.settings import Settings
from carlisting.parsing.exceptions import NoDataError, NoValidListingsError
from carlisting.service import build_listing_parser
from carlisting.settings_store.exceptions import SettingsLoadError, UnknownProviderError
from carlisting.settings_store.rest_store import SupabaseSettingsStore


def _rpc_handler(
    values: dict[str, str | None],
    seen: list[str],
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        function = request.url.path.rsplit("/", 1)[-1]
        seen.append(function)
        if function not in values:
            return httpx.Response(404, json={"message": f"function {function} not found"})
        return httpx.Response(200, json=values[function])

    return handler


def _store(values: dict[str, str | None], seen: list[str]) -> SupabaseSettingsStore:
    return SupabaseSettingsStore(
        url="https://project.supabase.co",
        api_key="anon-key",
        timeout_seconds=5,
        transport=httpx.MockTransport(_rpc_handler(values, seen)),
    )


def _openai_response(content: str) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


class TestGeminiPipeline:
    def test_parses_listing_end_to_end(self, corolla_listing: dict[str, Any]) -> None:
        seen: list[str] = []
        store = _store(
            {
                "get_ai_provider": "gemini",
                "get_gemini_apikey": "g-key",
                "get_gemini_prompt": "Extract car listings",
            },
            seen,
        )
        parser = build_listing_parser(Settings(), store)

        with patch("carlisting.parsing.gemini_client_adapter.genai") as mock_genai:
            client = mock_genai.Client.return_value
            client.models.generate_content.return_value.text = json.dumps(
                {"listings": [corolla_listing]}
            )
            result = parser.parse("2019 Toyota Corolla, 40000 km, $12000")

        assert result == [corolla_listing]
        assert seen[0] == "get_ai_provider"
        assert sorted(seen[1:]) == ["get_gemini_apikey", "get_gemini_prompt"]
        assert mock_genai.Client.call_args.kwargs["api_key"] == "g-key"
        client.close.assert_called_once()

    def test_blank_input_makes_no_calls(self) -> None:
        seen: list[str] = []
        parser = build_listing_parser(Settings(), _store({}, seen))

        with patch("carlisting.parsing.gemini_client_adapter.genai") as mock_genai:
            with pytest.raises(NoDataError):
                parser.parse("")

        assert seen == []
        mock_genai.Client.assert_not_called()


class TestOpenRouterPipeline:
    def test_uses_site_defaults_and_filters(self, corolla_listing: dict[str, Any]) -> None:
        seen: list[str] = []
        store = _store(
            {
                "get_ai_provider": "openrouter",
                "get_openrouter_apikey": "o-key",
                "get_openrouter_prompt": "Extract car listings",
                "get_openrouter_site_url": None,
                "get_openrouter_site_name": "",
            },
            seen,
        )
        settings = Settings(default_site_url="https://cars.test", default_site_name="BananaDB")
        parser = build_listing_parser(settings, store)
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _openai_response(
            json.dumps([corolla_listing, {**corolla_listing, "price": -1}])
        )

        with patch(
            "carlisting.parsing.openai_client_adapter.openai.OpenAI",
            return_value=mock_client,
        ) as mock_openai:
            result = parser.parse("two ads")

        assert result == [corolla_listing]
        mock_openai.assert_called_once_with(
            api_key="o-key", base_url="https://openrouter.ai/api/v1", max_retries=0
        )
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["extra_headers"] == {
            "HTTP-Referer": "https://cars.test",
            "X-Title": "BananaDB",
        }

    def test_no_valid_listings(self) -> None:
        seen: list[str] = []
        store = _store(
            {
                "get_ai_provider": "deepseek",
                "get_deepseek_apikey": "d-key",
                "get_deepseek_prompt": "Extract car listings",
            },
            seen,
        )
        parser = build_listing_parser(Settings(), store)
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _openai_response(
            '{"listings":[{"make":"","model":"X","year":2020,"mileage":0,"price":0}]}'
        )

        with patch(
            "carlisting.parsing.openai_client_adapter.openai.OpenAI",
            return_value=mock_client,
        ):
            with pytest.raises(NoValidListingsError):
                parser.parse("an ad")


class TestSettingsFailures:
    def test_missing_rpc_aborts_parse(self) -> None:
        seen: list[str] = []
        store = _store({"get_ai_provider": "deepseek", "get_deepseek_apikey": "k"}, seen)
        parser = build_listing_parser(Settings(), store)

        with pytest.raises(SettingsLoadError, match="get_deepseek_prompt not found"):
            parser.parse("an ad")

    def test_unknown_provider_aborts_parse(self) -> None:
        seen: list[str] = []
        parser = build_listing_parser(Settings(), _store({"get_ai_provider": "claude"}, seen))

        with pytest.raises(UnknownProviderError):
            parser.parse("an ad")
        assert seen == ["get_ai_provider"]
