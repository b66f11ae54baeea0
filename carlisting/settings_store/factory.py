from carlisting.config.settings import Settings
from carlisting.database.connection import init_pool
from carlisting.settings_store.base import BaseSettingsStore
from carlisting.settings_store.postgres_store import PostgresSettingsStore
from carlisting.settings_store.rest_store import SupabaseSettingsStore


class SettingsStoreFactory:
    """Creates the configured settings store backend."""

    @staticmethod
    def create(settings: Settings) -> BaseSettingsStore:
        """Create a settings store from application settings."""
        backend = settings.settings_store.lower()
        if backend == "postgres":
            init_pool(settings)
            return PostgresSettingsStore()
        if backend == "supabase":
            return SupabaseSettingsStore(
                url=settings.supabase_url,
                api_key=settings.supabase_key,
                timeout_seconds=settings.supabase_timeout_seconds,
            )
        raise ValueError(
            f"Unknown settings store '{backend}'. Choose from: ['postgres', 'supabase']"
        )
