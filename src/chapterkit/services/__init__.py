"""
Application services built on the providers and search utilities.
"""

__all__ = [
    "BookSearchService",
    "ReviewSearchService",
    "build_pagination",
    "parse_search_query",
]

from .book_search import BookSearchService, build_pagination, parse_search_query
from .review_search import ReviewSearchService
