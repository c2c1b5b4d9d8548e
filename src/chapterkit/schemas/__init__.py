"""
Data contracts and type definitions.
"""

__all__ = [
    "ProviderConfig",
    "RateLimitConfig",
    "SearchConfig",
    "SessionConfig",
    "CanonicalBook",
    "NormalizedSearchResult",
    "ProviderSearchResponse",
    "RawImageLinks",
    "RawIndustryIdentifier",
    "RawProviderItem",
    "RawSaleInfo",
    "RawVolumeInfo",
    "BookSearchPage",
    "BookSearchParams",
    "CandidatePage",
    "Pagination",
    "ReviewHit",
    "ReviewSearchResult",
    "SearchCacheParams",
]

from .book import (
    CanonicalBook,
    NormalizedSearchResult,
    ProviderSearchResponse,
    RawImageLinks,
    RawIndustryIdentifier,
    RawProviderItem,
    RawSaleInfo,
    RawVolumeInfo,
)
from .config import (
    ProviderConfig,
    RateLimitConfig,
    SearchConfig,
    SessionConfig,
)
from .search import (
    BookSearchPage,
    BookSearchParams,
    CandidatePage,
    Pagination,
    ReviewHit,
    ReviewSearchResult,
    SearchCacheParams,
)
