"""
Weighted term-frequency scoring over named text fields.
"""

__all__ = ["FIELD_WEIGHTS", "score", "tokenize_query"]

from collections.abc import Mapping

FIELD_WEIGHTS: dict[str, float] = {
    "title": 10.0,
    "author": 6.0,
    "excerpt": 3.0,
    "genre": 2.0,
    "content": 1.0,
}
DEFAULT_WEIGHT = 1.0

# Occurrences of one term counted per field. With this cap a single title
# hit (10) always beats any number of content hits (5).
MAX_HITS_PER_FIELD = 5


def tokenize_query(query: str) -> list[str]:
    """Split a query into unique, lower-cased terms in first-seen order."""
    return list(dict.fromkeys(query.lower().split()))


def score(
    fields: Mapping[str, str | None],
    query: str,
    weights: Mapping[str, float] | None = None,
) -> float:
    """Compute the relevance of a document for ``query``.

    Every term contributes ``weight(field) * occurrences`` for each field
    it appears in, matched case-insensitively. Fields missing from the
    weight table count with weight 1.

    Args:
        fields: Field name to text. ``None`` and empty values are skipped.
        query: Raw user query; split on whitespace.
        weights: Optional overrides merged over :data:`FIELD_WEIGHTS`.

    Returns:
        The score, ``0.0`` for a blank query or no match.
    """
    terms = tokenize_query(query)
    if not terms:
        return 0.0

    table = {**FIELD_WEIGHTS, **weights} if weights else FIELD_WEIGHTS
    total = 0.0
    for name, text in fields.items():
        if not isinstance(text, str) or not text:
            continue
        haystack = text.lower()
        weight = table.get(name, DEFAULT_WEIGHT)
        for term in terms:
            hits = haystack.count(term)
            if hits:
                total += weight * min(hits, MAX_HITS_PER_FIELD)
    return total
