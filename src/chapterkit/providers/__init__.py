"""
Book metadata providers and their error taxonomy.
"""

__all__ = [
    "BaseMetadataClient",
    "ConfigurationError",
    "InvalidSearchParams",
    "MetadataError",
    "NetworkError",
    "ProviderError",
    "RateLimitExceeded",
    "create_client",
    "hub",
]

from typing import Any

from chapterkit.schemas import ProviderConfig

from .base import BaseMetadataClient
from .errors import (
    ConfigurationError,
    InvalidSearchParams,
    MetadataError,
    NetworkError,
    ProviderError,
    RateLimitExceeded,
)
from .registry import hub


def create_client(
    provider: str = "google_books",
    config: ProviderConfig | None = None,
    **kwargs: Any,
) -> BaseMetadataClient:
    """Create the metadata client registered for ``provider``.

    Args:
        provider: Provider key, e.g. ``"google_books"``.
        config: Provider configuration; must carry an API key.
        **kwargs: Forwarded to the client constructor (``session``,
            caches, ``rate_limiter``, ``clock``).

    Raises:
        ValueError: If the provider is unknown.
        ConfigurationError: If no API key is configured.
    """
    return hub.build_client(provider, config, **kwargs)
