"""
Google Books provider.
"""

__all__ = ["GoogleBooksClient", "normalize"]

from .client import GoogleBooksClient
from .normalizer import normalize
