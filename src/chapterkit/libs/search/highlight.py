"""
Query term highlighting and snippet extraction.

Markup is inserted verbatim; the input text is not HTML-escaped, so
callers rendering untrusted text must escape it first.
"""

__all__ = ["extract_snippets", "highlight"]

import re

from .relevance import tokenize_query

ELLIPSIS = "..."


def _terms_pattern(terms: list[str]) -> re.Pattern[str]:
    # Longest first so "harry" wins over "har" at the same position.
    ordered = sorted(terms, key=len, reverse=True)
    return re.compile("|".join(re.escape(t) for t in ordered), re.IGNORECASE)


def highlight(
    text: str,
    query: str,
    *,
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str:
    """Wrap every occurrence of every query term in a marker.

    All terms are matched in a single left-to-right pass, so overlapping
    terms never produce nested markers. Original casing is preserved.

    Args:
        text: Text to annotate.
        query: Raw user query.
        open_tag: Marker inserted before a match.
        close_tag: Marker inserted after a match.

    Returns:
        The annotated text, or ``text`` unchanged for a blank query.
    """
    terms = tokenize_query(query)
    if not terms or not text:
        return text
    return _terms_pattern(terms).sub(
        lambda m: f"{open_tag}{m.group(0)}{close_tag}", text
    )


def _window(text: str, start: int, max_length: int) -> str:
    end = start + max_length
    snippet = text[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet += ELLIPSIS
    return snippet


def _centred_start(match: re.Match[str], max_length: int, text_length: int) -> int:
    span = match.end() - match.start()
    start = match.start() - max(0, max_length - span) // 2
    return max(0, min(start, text_length - max_length))


def extract_snippets(
    text: str,
    query: str,
    max_length: int = 160,
    max_snippets: int = 1,
) -> list[str]:
    """Cut windows of ``max_length`` characters around query matches.

    Matches closer than ``max_length // 2`` to the previous one belong to
    the same group. Each of the first ``max_snippets`` groups yields one
    window, centred on the group's first match and shifted to stay inside
    the text. Without any match a single window from the start is
    returned. ``...`` marks every truncated edge.

    Args:
        text: Source text.
        query: Raw user query.
        max_length: Window size in characters, excluding ellipses.
        max_snippets: Maximum number of windows.

    Returns:
        Snippets in text order; ``[text]`` when the text already fits.

    Raises:
        ValueError: If ``max_length`` or ``max_snippets`` is not positive.
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")
    if max_snippets < 1:
        raise ValueError(f"max_snippets must be positive, got {max_snippets}")
    if len(text) <= max_length:
        return [text]

    terms = tokenize_query(query)
    matches = list(_terms_pattern(terms).finditer(text)) if terms else []
    if not matches:
        return [_window(text, 0, max_length)]

    leaders = [matches[0]]
    previous = matches[0].start()
    for m in matches[1:]:
        if len(leaders) == max_snippets:
            break
        if m.start() - previous > max_length // 2:
            leaders.append(m)
        previous = m.start()

    return [
        _window(text, _centred_start(m, max_length, len(text)), max_length)
        for m in leaders
    ]
