"""
FastAPI Dependencies

FastAPI dependency injection for services and configuration.
Using Depends() pattern makes testing easier: tests swap in fake
settings or fake sources through app.dependency_overrides.
"""
from functools import lru_cache
from typing import List

from philsearch.core.config import Settings
from philsearch.services.sources import BaseSource, build_sources


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Uses lru_cache to ensure settings are only loaded once.

    Example test override:
        app.dependency_overrides[get_settings] = lambda: Settings(enabled_sources=["crossref"])
    """
    return Settings()


def get_sources() -> List[BaseSource]:
    """
    Get the configured academic sources in merge priority order.

    Built per request; sources hold no connections between requests.

    Example test override:
        app.dependency_overrides[get_sources] = lambda: [FakeSource()]
    """
    return build_sources(get_settings())
