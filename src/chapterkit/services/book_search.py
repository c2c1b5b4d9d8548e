"""
Book search facade used by the web and CLI layers.

Validates raw query-string parameters, runs the provider search and
shapes the result into a page with pagination metadata.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from chapterkit.providers import BaseMetadataClient, InvalidSearchParams
from chapterkit.schemas import BookSearchPage, BookSearchParams, Pagination
from chapterkit.schemas.search import (
    FILTER_VALUES,
    MAX_RESULTS_LIMIT,
    ORDER_BY_VALUES,
    PRINT_TYPE_VALUES,
)

logger = logging.getLogger(__name__)


def _parse_int(raw: Any, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidSearchParams(f"{name} must be an integer, got {raw!r}") from e


def _parse_choice(
    raw: Any,
    name: str,
    choices: tuple[str, ...],
    default: str | None,
) -> Any:
    if raw is None or raw == "":
        return default
    if raw not in choices:
        allowed = ", ".join(f'"{c}"' for c in choices)
        raise InvalidSearchParams(
            f"Invalid {name} parameter. Must be one of {allowed}"
        )
    return raw


def parse_search_query(query: Mapping[str, Any]) -> BookSearchParams:
    """Validate query-string style parameters.

    Recognised keys are ``q``, ``maxResults``, ``startIndex``, ``orderBy``,
    ``printType`` and ``filter``. Values may be strings or already typed.
    ``maxResults`` above 40 is lowered to 40 and a negative ``startIndex``
    is raised to 0.

    Args:
        query: Mapping of raw parameter values.

    Returns:
        The validated search parameters.

    Raises:
        InvalidSearchParams: If ``q`` is blank or a value is malformed.
    """
    q = query.get("q")
    q = q.strip() if isinstance(q, str) else ""
    if not q:
        raise InvalidSearchParams('Query parameter "q" is required')

    max_results = min(
        _parse_int(query.get("maxResults"), "maxResults", 10),
        MAX_RESULTS_LIMIT,
    )
    if max_results < 1:
        raise InvalidSearchParams(
            f"maxResults must be between 1 and {MAX_RESULTS_LIMIT}"
        )
    start_index = max(_parse_int(query.get("startIndex"), "startIndex", 0), 0)

    return BookSearchParams(
        query=q,
        max_results=max_results,
        start_index=start_index,
        order_by=_parse_choice(
            query.get("orderBy"), "orderBy", ORDER_BY_VALUES, "relevance"
        ),
        print_type=_parse_choice(
            query.get("printType"), "printType", PRINT_TYPE_VALUES, "books"
        ),
        filter=_parse_choice(query.get("filter"), "filter", FILTER_VALUES, None),
    )


def build_pagination(
    start_index: int,
    max_results: int,
    total_items: int,
    has_more: bool,
) -> Pagination:
    """Derive page numbers from a provider offset window.

    Example:
        >>> build_pagination(10, 10, 25, True)["current_page"]
        2
    """
    return Pagination(
        current_page=start_index // max_results + 1,
        total_pages=math.ceil(total_items / max_results),
        total_items=total_items,
        items_per_page=max_results,
        start_index=start_index,
        has_next_page=has_more,
        has_prev_page=start_index > 0,
    )


class BookSearchService:
    """Exposes provider search and lookup as plain, JSON-ready data.

    Provider errors propagate unchanged; each carries ``http_status``,
    ``retryable`` and a ``fallback`` hint for the boundary layer.
    """

    def __init__(self, client: BaseMetadataClient) -> None:
        self._client = client

    @property
    def client(self) -> BaseMetadataClient:
        return self._client

    async def search(
        self,
        params: BookSearchParams | Mapping[str, Any],
    ) -> BookSearchPage:
        """Run a search and return the normalized page.

        Args:
            params: Validated parameters, or a raw mapping that is passed
                through :func:`parse_search_query` first. Out-of-range
                page sizes and offsets are clamped, and the pagination
                reflects the clamped values.
        """
        if not isinstance(params, BookSearchParams):
            params = parse_search_query(params)
        params = params.clamped()

        result = await self._client.search_and_normalize(params)
        logger.debug(
            "Search '%s' returned %d of %d items",
            params.query,
            len(result.books),
            result.total_items,
        )

        return BookSearchPage(
            books=[book.to_dict() for book in result.books],
            pagination=build_pagination(
                params.start_index,
                params.max_results,
                result.total_items,
                result.has_more,
            ),
            query={
                "q": params.query,
                "orderBy": params.order_by,
                "printType": params.print_type,
                "filter": params.filter,
            },
        )

    async def get_by_id(self, book_id: str) -> dict[str, Any] | None:
        """Fetch one book as a plain dict, ``None`` when it does not exist.

        Raises:
            InvalidSearchParams: If ``book_id`` is blank.
        """
        book_id = book_id.strip() if isinstance(book_id, str) else ""
        if not book_id:
            raise InvalidSearchParams(
                "Book ID is required", fallback="Provide a volume id"
            )

        item = await self._client.get_by_id(book_id)
        if item is None:
            return None
        return self._client.normalize(item).to_dict()
