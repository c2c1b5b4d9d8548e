"""
Canonical cache keys for review search pages.
"""

__all__ = ["build_cache_key"]

from chapterkit.schemas import SearchCacheParams

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT = "-publishedDate"


def build_cache_key(params: SearchCacheParams) -> str:
    """Build a key under which equivalent searches collide.

    ``q`` is trimmed and lower-cased, tags are trimmed, de-duplicated and
    sorted, and absent values take their defaults. Each component is
    labelled, so a ``:`` or ``,`` inside the query cannot shift fields.

    Example:
        >>> build_cache_key({"q": " Test ", "tags": ["b", "a"]})
        'search|q=test|tags=a,b|status=|page=1|limit=10|sort=-publishedDate'
    """
    q = (params.get("q") or "").strip().lower()
    tags = sorted({t.strip() for t in params.get("tags") or () if t and t.strip()})
    status = params.get("status") or ""
    page = params.get("page") or DEFAULT_PAGE
    limit = params.get("limit") or DEFAULT_LIMIT
    sort = params.get("sort") or DEFAULT_SORT

    return "|".join(
        [
            "search",
            f"q={q}",
            f"tags={','.join(tags)}",
            f"status={status}",
            f"page={page}",
            f"limit={limit}",
            f"sort={sort}",
        ]
    )
