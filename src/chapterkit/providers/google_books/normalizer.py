"""
Mapping of Google Books volume payloads to :class:`CanonicalBook`.

The provider omits fields freely and occasionally sends values of the
wrong type. Every accessor here falls back to a default instead of
raising, so a payload as bare as ``{"id": "x", "volumeInfo": {}}`` still
yields a complete record.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from chapterkit.schemas import CanonicalBook, RawProviderItem

UNKNOWN_TITLE = "Unknown Title"

COVER_PREFERENCE: tuple[str, ...] = (
    "extraLarge",
    "large",
    "medium",
    "small",
    "thumbnail",
    "smallThumbnail",
)


def normalize(item: RawProviderItem) -> CanonicalBook:
    """Convert a raw provider item into a canonical book record.

    Args:
        item: Volume as returned by the volumes endpoint.

    Returns:
        The normalized record. Missing optional fields are ``None`` or
        empty tuples.
    """
    info = _mapping(item.get("volumeInfo"))
    isbn, isbn13 = _isbns(info.get("industryIdentifiers"))

    return CanonicalBook(
        id=_str(item.get("id")) or "",
        title=_str(info.get("title")) or UNKNOWN_TITLE,
        authors=_str_tuple(info.get("authors")),
        published_date=_str(info.get("publishedDate")),
        description=_str(info.get("description")),
        page_count=_int(info.get("pageCount")),
        categories=_str_tuple(info.get("categories")),
        cover_image_url=_cover(info.get("imageLinks")),
        isbn=isbn,
        isbn13=isbn13,
        publisher=_str(info.get("publisher")),
        language=_str(info.get("language")),
        average_rating=_float(info.get("averageRating")),
        ratings_count=_int(info.get("ratingsCount")),
    )


def _cover(links: Any) -> str | None:
    links = _mapping(links)
    for size in COVER_PREFERENCE:
        url = _str(links.get(size))
        if url:
            return url
    return None


def _isbns(identifiers: Any) -> tuple[str | None, str | None]:
    """Return the first ISBN-10 and the first ISBN-13 in one pass."""
    isbn: str | None = None
    isbn13: str | None = None
    if not isinstance(identifiers, list):
        return isbn, isbn13

    for entry in identifiers:
        entry = _mapping(entry)
        value = _str(entry.get("identifier"))
        if not value:
            continue
        match entry.get("type"):
            case "ISBN_10" if isbn is None:
                isbn = value
            case "ISBN_13" if isbn13 is None:
                isbn13 = value
        if isbn is not None and isbn13 is not None:
            break
    return isbn, isbn13


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str) and v)


def _int(value: Any) -> int | None:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)
