"""
Client for the Google Books volumes API.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any
from urllib.parse import quote

from chapterkit.providers.base import BaseMetadataClient
from chapterkit.providers.errors import ProviderError
from chapterkit.providers.registry import hub
from chapterkit.schemas import (
    BookSearchParams,
    CanonicalBook,
    ProviderSearchResponse,
    RawProviderItem,
)

from .normalizer import normalize

logger = logging.getLogger(__name__)


@hub.register_client()
class GoogleBooksClient(BaseMetadataClient):
    """Read-through cached, quota-guarded access to Google Books.

    Search responses and single volumes are cached raw, under separate
    lifetimes (``search_ttl`` and ``details_ttl``). A 404 on a volume
    lookup yields ``None`` and is not cached.
    """

    provider_key = "google_books"
    provider_name = "Google Books"

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    async def search(self, params: BookSearchParams) -> ProviderSearchResponse:
        params = params.clamped()
        key = self.search_cache_key(params)

        cached = self.search_cache.get(key)
        if cached is not None:
            logger.debug("Search cache hit: %s", key)
            return cached
        logger.debug("Search cache miss: %s", key)

        self._acquire_quota()
        resp = await self._fetch(self.base_url, self._build_search_query(params))
        if not resp.ok:
            logger.warning(
                "Google Books search '%s' failed: %d %s",
                params.query,
                resp.status,
                resp.reason,
            )
            raise ProviderError(resp.status, resp.reason)

        data = self._decode(resp)
        if not isinstance(data, dict):
            raise ProviderError(resp.status, "Unexpected payload")

        self.search_cache.set(key, data)
        return data

    async def get_by_id(self, book_id: str) -> RawProviderItem | None:
        key = self.details_cache_key(book_id)

        cached = self.details_cache.get(key)
        if cached is not None:
            logger.debug("Volume cache hit: %s", book_id)
            return cached
        logger.debug("Volume cache miss: %s", book_id)

        self._acquire_quota()
        url = f"{self.base_url}/{quote(book_id, safe='')}"
        resp = await self._fetch(url, {"key": self._api_key})
        if resp.status == 404:
            logger.debug("Volume not found: %s", book_id)
            return None
        if not resp.ok:
            logger.warning(
                "Google Books volume '%s' failed: %d %s",
                book_id,
                resp.status,
                resp.reason,
            )
            raise ProviderError(resp.status, resp.reason)

        data = self._decode(resp)
        if not isinstance(data, dict):
            raise ProviderError(resp.status, "Unexpected payload")

        self.details_cache.set(key, data)
        return data

    def normalize(self, item: RawProviderItem) -> CanonicalBook:
        return normalize(item)

    @staticmethod
    def search_cache_key(params: BookSearchParams) -> str:
        """Deterministic cache key over the full parameter set."""
        return "search:" + json.dumps(asdict(params), sort_keys=True)

    @staticmethod
    def details_cache_key(book_id: str) -> str:
        return f"book:{book_id}"

    def _build_search_query(self, params: BookSearchParams) -> dict[str, Any]:
        query: dict[str, Any] = {
            "q": params.query,
            "key": self._api_key,
            "maxResults": str(params.max_results),
            "startIndex": str(params.start_index),
            "orderBy": params.order_by,
            "printType": params.print_type,
        }
        if params.filter:
            query["filter"] = params.filter
        return query
