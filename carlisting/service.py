from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from carlisting.config.settings import Settings
from carlisting.logging.logger import Log
from carlisting.parsing.factory import ProviderFactory
from carlisting.parsing.parser import CarListingParser
from carlisting.settings_store.accessor import SettingsAccessor
from carlisting.settings_store.base import BaseSettingsStore
from carlisting.settings_store.factory import SettingsStoreFactory


def build_settings_accessor(settings: Settings, store: BaseSettingsStore) -> SettingsAccessor:
    """Build a SettingsAccessor with fallbacks taken from settings."""
    return SettingsAccessor(
        store,
        default_site_url=settings.default_site_url,
        default_site_name=settings.default_site_name,
        max_workers=settings.settings_fetch_workers,
    )


def build_listing_parser(settings: Settings, store: BaseSettingsStore) -> CarListingParser:
    """Build a CarListingParser with every provider client wired in."""
    return CarListingParser(
        settings_accessor=build_settings_accessor(settings, store),
        providers=ProviderFactory.create_all(settings),
    )


@contextmanager
def listing_parser_session(
    settings: Settings | None = None,
) -> Generator[CarListingParser, None, None]:
    """Entry point: configure logging -> open settings store -> yield parser."""
    settings = settings or Settings()
    Log.configure(settings.log_level)
    store = SettingsStoreFactory.create(settings)
    try:
        yield build_listing_parser(settings, store)
    finally:
        store.close()


def parse_car_listing(raw_text: str, settings: Settings | None = None) -> list[dict[str, Any]]:
    """Parse ``raw_text`` in a one-off session."""
    with listing_parser_session(settings) as parser:
        return parser.parse(raw_text)
