from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    settings_store: str = "postgres"
    settings_fetch_workers: int = 4

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "postgres"
    db_username: str = "postgres"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    supabase_url: str = ""
    supabase_key: str = ""
    supabase_timeout_seconds: int = 10

    default_site_url: str = "http://localhost:5173"
    default_site_name: str = "BananaDB"

    provider_temperature: float = 0.3
    provider_timeout_seconds: int | None = None

    gemini_model_name: str = "gemini-2.0-flash"

    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model_name: str = "deepseek-chat"

    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model_name: str = "deepseek/deepseek-r1:free"
    openrouter_fallback_models: list[str] = [
        "anthropic/claude-3-sonnet",
        "gryphe/mythomax-l2-13b",
    ]
