"""
Search relevance utilities: scoring, highlighting, snippets and cache keys.
"""

__all__ = [
    "FIELD_WEIGHTS",
    "build_cache_key",
    "extract_snippets",
    "highlight",
    "score",
    "tokenize_query",
]

from .cache_key import build_cache_key
from .highlight import extract_snippets, highlight
from .relevance import FIELD_WEIGHTS, score, tokenize_query
