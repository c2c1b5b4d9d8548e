"""
Default HTTP headers used by the networking layer of chapterkit.

The book metadata providers speak JSON, so the presets here ask for JSON
first and identify the client with a stable product token.
"""

# -----------------------------------------------------------------------------
# Default preferences & headers
# -----------------------------------------------------------------------------

DEFAULT_USER_AGENT = "Chasing-Chapters/1.0"

ACCEPT_JSON = "application/json,text/plain;q=0.9,*/*;q=0.8"

DEFAULT_USER_HEADERS = {
    "Accept": ACCEPT_JSON,
    "Accept-Encoding": "gzip, deflate",
    "Accept-Language": "en;q=0.9",
    "User-Agent": DEFAULT_USER_AGENT,
    "Connection": "keep-alive",
}
