"""
Provider payload shapes and the canonical book record.

The ``Raw*`` types describe the JSON returned by the Google Books volumes
API. Every key is optional (``total=False``) because the provider omits
fields freely; the normalizer is the only place that validates them.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, TypedDict

IdentifierType = Literal["ISBN_10", "ISBN_13", "ISSN", "OTHER"]


class RawImageLinks(TypedDict, total=False):
    """Cover image URLs keyed by provider size name."""

    smallThumbnail: str
    thumbnail: str
    small: str
    medium: str
    large: str
    extraLarge: str


class RawIndustryIdentifier(TypedDict, total=False):
    type: IdentifierType | str
    identifier: str


class RawVolumeInfo(TypedDict, total=False):
    """Bibliographic block nested under ``volumeInfo``."""

    title: str
    subtitle: str
    authors: list[str]
    publishedDate: str
    description: str
    pageCount: int
    categories: list[str]
    imageLinks: RawImageLinks
    industryIdentifiers: list[RawIndustryIdentifier]
    publisher: str
    language: str
    printType: Literal["BOOK", "MAGAZINE"]
    maturityRating: Literal["NOT_MATURE", "MATURE"]
    averageRating: float
    ratingsCount: int


class RawPrice(TypedDict, total=False):
    amount: float
    currencyCode: str


class RawSaleInfo(TypedDict, total=False):
    country: str
    saleability: str
    isEbook: bool
    listPrice: RawPrice
    retailPrice: RawPrice


class RawProviderItem(TypedDict, total=False):
    """A single volume as returned by the provider.

    Attributes:
        id: Provider volume identifier.
        volumeInfo: Bibliographic metadata.
        saleInfo: Optional store availability and pricing.
    """

    id: str
    volumeInfo: RawVolumeInfo
    saleInfo: RawSaleInfo


class ProviderSearchResponse(TypedDict, total=False):
    """Top-level search response of the volumes endpoint."""

    kind: str
    totalItems: int
    items: list[RawProviderItem]


@dataclass(frozen=True, slots=True)
class CanonicalBook:
    """Normalized, always-complete book record.

    Instances are built by the normalizer and never mutated afterwards.
    Optional scalar fields are ``None`` when the provider did not supply
    them; list-like fields are empty tuples.

    Attributes:
        id: Provider volume identifier.
        title: Book title, ``"Unknown Title"`` when missing.
        authors: Author names in provider order.
        published_date: Publication date string as given by the provider.
        description: Publisher description (may contain HTML).
        page_count: Number of printed pages.
        categories: Provider subject categories.
        cover_image_url: Best available cover image URL.
        isbn: First ISBN-10 found.
        isbn13: First ISBN-13 found.
        publisher: Publisher name.
        language: Language code (e.g. ``"en"``).
        average_rating: Average reader rating (0-5).
        ratings_count: Number of ratings behind ``average_rating``.
    """

    id: str
    title: str
    authors: tuple[str, ...] = ()
    published_date: str | None = None
    description: str | None = None
    page_count: int | None = None
    categories: tuple[str, ...] = ()
    cover_image_url: str | None = None
    isbn: str | None = None
    isbn13: str | None = None
    publisher: str | None = None
    language: str | None = None
    average_rating: float | None = None
    ratings_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping with list-valued sequences."""
        data = asdict(self)
        data["authors"] = list(self.authors)
        data["categories"] = list(self.categories)
        return data


@dataclass(frozen=True, slots=True)
class NormalizedSearchResult:
    """A page of normalized books plus provider totals.

    Attributes:
        books: Normalized records in provider order.
        total_items: Total matches reported by the provider.
        has_more: Whether further pages exist after this one.
    """

    books: tuple[CanonicalBook, ...] = field(default_factory=tuple)
    total_items: int = 0
    has_more: bool = False
