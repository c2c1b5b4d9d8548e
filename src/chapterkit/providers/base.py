"""
Base client for book metadata providers.

This module defines :class:`BaseMetadataClient`, which owns the HTTP
session, the response caches and the outbound rate limiter shared by
provider implementations.
"""

from __future__ import annotations

import abc
import logging
import math
import time
import types
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Self

from chapterkit.infra.cache import TTLCache
from chapterkit.infra.maintenance import SupportsCleanup
from chapterkit.infra.rate_limiter import FixedWindowRateLimiter
from chapterkit.infra.sessions import BaseResponse, BaseSession, create_session
from chapterkit.schemas import (
    BookSearchParams,
    CanonicalBook,
    NormalizedSearchResult,
    ProviderConfig,
    ProviderSearchResponse,
    RawProviderItem,
)

from .errors import ConfigurationError, NetworkError, ProviderError, RateLimitExceeded

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60


class BaseMetadataClient(abc.ABC):
    """Base class for book metadata provider clients.

    Lookups are read-through: a cached response is returned without
    touching the rate limiter. On a miss the limiter is consulted under a
    single client identity before the network call is made, and successful
    responses are cached.

    Two concurrent misses for the same key both reach the provider; the
    provider API is idempotent, so no in-flight de-duplication is done.

    The session must be opened with :meth:`init` (or ``async with``)
    before the first lookup; an unopened session raises ``RuntimeError``.
    """

    provider_key: str
    provider_name: str

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        session: BaseSession | None = None,
        search_cache: TTLCache[ProviderSearchResponse] | None = None,
        details_cache: TTLCache[RawProviderItem] | None = None,
        rate_limiter: FixedWindowRateLimiter | None = None,
        clock: Callable[[], float] = time.time,
        **kwargs: Any,
    ) -> None:
        """Initializes a new client instance.

        Args:
            config: Provider configuration. If omitted, a default
                :class:`ProviderConfig` (without credential) is used.
            session: Optional preconfigured HTTP session. If omitted, a new
                session is created via :func:`create_session`.
            search_cache: Cache for search responses. Created from
                ``config.search_ttl`` when omitted.
            details_cache: Cache for single-volume responses. Created from
                ``config.details_ttl`` when omitted.
            rate_limiter: Outbound quota tracker. Created from
                ``config.rate_limit`` when omitted.
            clock: Time source shared by the components created here.
            **kwargs: Additional keyword arguments forwarded to
                :func:`create_session` when ``session`` is not provided.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        config = config or ProviderConfig()
        if not config.api_key:
            raise ConfigurationError(
                f"{self.provider_name}: API key is not configured",
            )

        self._config = config
        self._api_key = config.api_key
        self._client_id = config.client_id
        self._clock = clock

        session_cfg = config.session_cfg
        if not session_cfg.user_agent:
            session_cfg = replace(session_cfg, user_agent=config.user_agent)
        self.session = session or create_session(
            backend=config.backend,
            cfg=session_cfg,
            **kwargs,
        )

        self.search_cache: TTLCache[ProviderSearchResponse] = (
            search_cache
            if search_cache is not None
            else TTLCache(config.search_ttl, clock=clock)
        )
        self.details_cache: TTLCache[RawProviderItem] = (
            details_cache
            if details_cache is not None
            else TTLCache(config.details_ttl, clock=clock)
        )
        self.rate_limiter = (
            rate_limiter
            if rate_limiter is not None
            else FixedWindowRateLimiter(
                config.rate_limit.max_requests,
                config.rate_limit.window_seconds,
                clock=clock,
            )
        )

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @abc.abstractmethod
    async def search(self, params: BookSearchParams) -> ProviderSearchResponse:
        """Searches the provider.

        Args:
            params: Search parameters.

        Returns:
            The raw provider response.

        Raises:
            RateLimitExceeded: If the outbound quota is exhausted.
            ProviderError: If the provider answers with a non-2xx status.
            NetworkError: If the provider cannot be reached.
            RuntimeError: If the client has not been initialized.
        """
        ...

    @abc.abstractmethod
    async def get_by_id(self, book_id: str) -> RawProviderItem | None:
        """Fetches a single volume, or ``None`` if the provider has no such id."""
        ...

    @abc.abstractmethod
    def normalize(self, item: RawProviderItem) -> CanonicalBook:
        """Maps a raw provider item to a :class:`CanonicalBook`. Never raises."""
        ...

    async def search_and_normalize(
        self,
        params: BookSearchParams,
    ) -> NormalizedSearchResult:
        """Runs :meth:`search` and normalizes every returned item.

        ``has_more`` is computed from the clamped parameters the provider
        actually received.
        """
        params = params.clamped()
        response = await self.search(params)
        books = tuple(self.normalize(item) for item in response.get("items") or [])
        total = response.get("totalItems")
        total_items = total if isinstance(total, int) else 0

        return NormalizedSearchResult(
            books=books,
            total_items=total_items,
            has_more=params.start_index + len(books) < total_items,
        )

    def cleanup_targets(self) -> list[SupportsCleanup]:
        """Returns the caches and limiter a periodic sweep should visit."""
        return [self.search_cache, self.details_cache, self.rate_limiter]

    async def init(self) -> None:
        await self.session.init()

    async def close(self) -> None:
        await self.session.close()

    def _acquire_quota(self) -> None:
        """Counts one outbound call against the shared client identity.

        Raises:
            RateLimitExceeded: If the current window is exhausted.
        """
        if self.rate_limiter.is_allowed(self._client_id):
            return

        reset_at = self.rate_limiter.get_reset_time(self._client_id)
        retry_after = (
            max(1, math.ceil(reset_at - self._clock()))
            if reset_at is not None
            else DEFAULT_RETRY_AFTER
        )
        logger.warning(
            "%s: outbound quota exhausted for %s, retry in %ds",
            self.provider_name,
            self._client_id,
            retry_after,
        )
        raise RateLimitExceeded(retry_after)

    async def _fetch(self, url: str, params: dict[str, Any]) -> BaseResponse:
        """Performs a GET against the provider.

        Raises:
            NetworkError: If the request fails at the transport level.
            RuntimeError: If the session is not initialized.
        """
        try:
            return await self.session.get(url, params=params)
        except ConnectionError as e:
            logger.warning("%s: request to %s failed: %s", self.provider_name, url, e)
            raise NetworkError(
                f"Unable to connect to {self.provider_name}",
                fallback="Check your internet connection or try manual entry",
            ) from e

    def _decode(self, resp: BaseResponse) -> Any:
        """Parses a successful response body as JSON.

        Raises:
            ProviderError: If the body is not valid JSON.
        """
        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError(resp.status, "Invalid JSON payload") from e

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
