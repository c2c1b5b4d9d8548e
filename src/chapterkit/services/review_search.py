"""
Ranked, highlighted and cached search over review documents.

The documents themselves come from an external persistence layer through
an async ``fetch_candidates`` callable; this module only ranks, annotates
and caches the page it returns.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from chapterkit.infra.cache import TTLCache
from chapterkit.infra.maintenance import SupportsCleanup
from chapterkit.libs.search import build_cache_key, extract_snippets, highlight, score
from chapterkit.libs.search.cache_key import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_SORT
from chapterkit.schemas import (
    CandidatePage,
    ReviewHit,
    ReviewSearchResult,
    SearchCacheParams,
    SearchConfig,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS: tuple[str, ...] = ("title", "author", "excerpt", "genre", "content")

CandidateSource = Callable[[SearchCacheParams], Awaitable[CandidatePage]]


def canonical_params(params: SearchCacheParams) -> SearchCacheParams:
    """Fill in defaults and drop blank tags, keeping the caller's spelling."""
    tags = [t.strip() for t in params.get("tags") or () if t and t.strip()]
    return SearchCacheParams(
        q=params.get("q") or "",
        tags=list(dict.fromkeys(tags)),
        status=params.get("status") or "",
        page=params.get("page") or DEFAULT_PAGE,
        limit=params.get("limit") or DEFAULT_LIMIT,
        sort=params.get("sort") or DEFAULT_SORT,
    )


def _detached(result: ReviewSearchResult, *, cached: bool) -> ReviewSearchResult:
    """Copy ``result`` so that no list or dict is shared with the original.

    Source documents are read-only mappings and stay shared.
    """
    hits = [
        ReviewHit(doc=h["doc"], score=h["score"], highlights=dict(h["highlights"]))
        for h in result["hits"]
    ]
    query = SearchCacheParams(**result["query"])
    if "tags" in query:
        query["tags"] = list(query["tags"])
    return ReviewSearchResult(
        **{**result, "hits": hits, "query": query, "cached": cached}
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class ReviewSearchService:
    """Scores candidate documents against a query and caches result pages.

    Pages are cached under :func:`build_cache_key`, so queries differing
    only in case, surrounding blanks or tag order share one entry.

    Args:
        fetch_candidates: Async source of candidate documents for the
            canonical parameters.
        cache: Page cache. A private one is created when omitted.
        ttl: Lifetime of a cached page in seconds.
        snippet_length: Window size of the excerpt snippet.
    """

    def __init__(
        self,
        fetch_candidates: CandidateSource,
        *,
        cache: TTLCache[ReviewSearchResult] | None = None,
        ttl: float = 300.0,
        snippet_length: int = 160,
    ) -> None:
        self._fetch_candidates = fetch_candidates
        self._ttl = ttl
        self._snippet_length = snippet_length
        self.cache: TTLCache[ReviewSearchResult] = (
            cache if cache is not None else TTLCache(ttl)
        )

    @classmethod
    def from_config(
        cls,
        fetch_candidates: CandidateSource,
        cfg: SearchConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> ReviewSearchService:
        """Build a service from the ``general.search`` settings.

        ``cache_ttl`` sets the page lifetime and ``snippet_length`` the
        excerpt window.
        """
        return cls(
            fetch_candidates,
            cache=TTLCache(cfg.cache_ttl, clock=clock),
            ttl=cfg.cache_ttl,
            snippet_length=cfg.snippet_length,
        )

    async def search(self, params: SearchCacheParams) -> ReviewSearchResult:
        """Return the ranked page for ``params``.

        Served from cache with ``cached=True`` when an equivalent search ran
        within the TTL. Errors raised by the candidate source propagate.
        """
        params = canonical_params(params)
        key = build_cache_key(params)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Review search cache hit: %s", key)
            return _detached(cached, cached=True)
        logger.debug("Review search cache miss: %s", key)

        page = await self._fetch_candidates(params)
        query = params.get("q", "")
        hits = [self._annotate(doc, query) for doc in page["docs"]]
        if query.strip():
            hits.sort(key=lambda hit: hit["score"], reverse=True)

        result = ReviewSearchResult(
            hits=hits,
            total_docs=page["total_docs"],
            total_pages=page["total_pages"],
            page=page["page"],
            has_prev_page=page["has_prev_page"],
            has_next_page=page["has_next_page"],
            query=params,
        )
        self.cache.set(key, _detached(result, cached=False), self._ttl)
        return ReviewSearchResult(**result, cached=False)

    def cleanup_targets(self) -> list[SupportsCleanup]:
        return [self.cache]

    def _annotate(self, doc: Mapping[str, Any], query: str) -> ReviewHit:
        fields = {name: _text(doc.get(name)) for name in SEARCH_FIELDS}
        highlights: dict[str, str] = {}
        if fields["title"]:
            highlights["title"] = highlight(fields["title"], query)
        if fields["excerpt"]:
            snippet = extract_snippets(fields["excerpt"], query, self._snippet_length)
            highlights["excerpt"] = highlight(snippet[0], query)

        return ReviewHit(doc=doc, score=score(fields, query), highlights=highlights)
