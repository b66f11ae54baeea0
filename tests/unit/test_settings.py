import pytest
from pydantic import ValidationError

from carlisting.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_settings_store(self) -> None:
        s = Settings()
        assert s.settings_store == "postgres"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_site_identity(self) -> None:
        s = Settings()
        assert s.default_site_name == "BananaDB"
        assert s.default_site_url.startswith("http")

    def test_default_temperature(self) -> None:
        s = Settings()
        assert s.provider_temperature == 0.3

    def test_default_timeout_is_transport_default(self) -> None:
        s = Settings()
        assert s.provider_timeout_seconds is None

    def test_default_provider_models(self) -> None:
        s = Settings()
        assert s.deepseek_model_name == "deepseek-chat"
        assert s.openrouter_model_name == "deepseek/deepseek-r1:free"
        assert s.openrouter_fallback_models == [
            "anthropic/claude-3-sonnet",
            "gryphe/mythomax-l2-13b",
        ]


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_settings_store(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SETTINGS_STORE", "supabase")
        s = Settings()
        assert s.settings_store == "supabase"

    def test_loads_db_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "5433")
        s = Settings()
        assert s.db_port == 5433

    def test_loads_fallback_models_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENROUTER_FALLBACK_MODELS", '["a/b", "c/d"]')
        s = Settings()
        assert s.openrouter_fallback_models == ["a/b", "c/d"]

    def test_loads_provider_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "20")
        s = Settings()
        assert s.provider_timeout_seconds == 20


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_temperature_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROVIDER_TEMPERATURE", "warm")
        with pytest.raises(ValidationError):
            Settings()
