from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Literal, NotRequired, TypedDict

OrderBy = Literal["relevance", "newest"]
PrintType = Literal["all", "books", "magazines"]
VolumeFilter = Literal["partial", "full", "free-ebooks", "paid-ebooks", "ebooks"]

ORDER_BY_VALUES: tuple[str, ...] = ("relevance", "newest")
PRINT_TYPE_VALUES: tuple[str, ...] = ("all", "books", "magazines")
FILTER_VALUES: tuple[str, ...] = (
    "partial",
    "full",
    "free-ebooks",
    "paid-ebooks",
    "ebooks",
)

MAX_RESULTS_LIMIT = 40


@dataclass(frozen=True, slots=True)
class BookSearchParams:
    """Parameters of a provider volume search.

    Attributes:
        query: Free-text provider query (supports ``intitle:`` etc.).
        max_results: Page size, 1..40.
        start_index: Zero-based offset of the first result.
        order_by: Provider ordering.
        print_type: Restrict to books, magazines or both.
        filter: Optional availability filter.
    """

    query: str
    max_results: int = 10
    start_index: int = 0
    order_by: OrderBy = "relevance"
    print_type: PrintType = "books"
    filter: VolumeFilter | None = None

    def clamped(self) -> "BookSearchParams":
        """Returns the parameters as the provider will receive them.

        ``max_results`` is forced into 1..40 and ``start_index`` is at
        least 0. Returns ``self`` when nothing changes.
        """
        max_results = min(max(self.max_results, 1), MAX_RESULTS_LIMIT)
        start_index = max(self.start_index, 0)
        if (max_results, start_index) == (self.max_results, self.start_index):
            return self
        return replace(self, max_results=max_results, start_index=start_index)


class Pagination(TypedDict):
    """Pagination metadata for a provider search page."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    start_index: int
    has_next_page: bool
    has_prev_page: bool


class BookSearchPage(TypedDict):
    """Result of :meth:`BookSearchService.search`.

    Attributes:
        books: Normalized books as plain dicts.
        pagination: Page metadata.
        query: Echo of the effective search parameters.
    """

    books: list[dict[str, Any]]
    pagination: Pagination
    query: dict[str, Any]


class SearchCacheParams(TypedDict, total=False):
    """Query parameters of the in-app review search.

    Every key is optional; defaults are substituted when building cache
    keys and when querying the candidate source.
    """

    q: str
    tags: list[str]
    status: str
    page: int
    limit: int
    sort: str


class CandidatePage(TypedDict):
    """A page of candidate documents returned by the persistence layer."""

    docs: list[Mapping[str, Any]]
    total_docs: int
    total_pages: int
    page: int
    has_prev_page: bool
    has_next_page: bool


class ReviewHit(TypedDict):
    """A scored and annotated review document."""

    doc: Mapping[str, Any]
    score: float
    highlights: dict[str, str]


class ReviewSearchResult(TypedDict):
    """A ranked page of review search hits.

    Attributes:
        hits: Scored documents, best first when a query is present.
        total_docs: Total matching documents in the persistence layer.
        total_pages: Total pages at the requested page size.
        page: Current page number (1-based).
        has_prev_page: Whether a previous page exists.
        has_next_page: Whether a following page exists.
        query: Echo of the canonical parameters.
        cached: ``True`` when served from the search page cache.
    """

    hits: list[ReviewHit]
    total_docs: int
    total_pages: int
    page: int
    has_prev_page: bool
    has_next_page: bool
    query: SearchCacheParams
    cached: NotRequired[bool]
