"""
Typed settings handed from the config adapter to sessions and clients.
"""

from dataclasses import dataclass, field


@dataclass
class SessionConfig:
    """Transport settings shared by every session backend.

    Attributes:
        timeout: Total time allowed for one request, in seconds.
        max_connections: Connection pool size.
        user_agent: Overrides the default User-Agent when set.
        headers: Replaces the default header set when given.
        impersonate: Browser fingerprint to mimic (curl_cffi only).
        verify_ssl: Verify TLS certificates.
        http2: Negotiate HTTP/2 where possible (httpx only).
        trust_env: Honour proxy variables from the environment.
        proxy: Proxy URL for all requests.
        proxy_user: Proxy username.
        proxy_pass: Proxy password.
    """

    timeout: float = 10.0
    max_connections: int = 10
    user_agent: str | None = None
    headers: dict[str, str] | None = None
    impersonate: str | None = "chrome"
    verify_ssl: bool = True
    http2: bool = True
    trust_env: bool = False
    proxy: str | None = None
    proxy_user: str | None = None
    proxy_pass: str | None = None


@dataclass
class RateLimitConfig:
    """Fixed-window quota applied to outbound provider calls.

    Attributes:
        max_requests: Requests allowed per window.
        window_seconds: Window length in seconds.
    """

    max_requests: int = 100
    window_seconds: float = 60.0


@dataclass
class ProviderConfig:
    """Configuration for a book metadata provider client.

    Attributes:
        api_key: Provider credential. ``None`` means "not configured".
        base_url: Volumes endpoint.
        user_agent: User-Agent sent with provider requests.
        client_id: Identity under which all outbound calls are rate limited.
        search_ttl: Lifetime of cached search responses, in seconds.
        details_ttl: Lifetime of cached single-volume responses, in seconds.
        backend: HTTP backend name (aiohttp, httpx, curl_cffi).
        rate_limit: Quota settings.
        session_cfg: HTTP session configuration.
    """

    api_key: str | None = None
    base_url: str = "https://www.googleapis.com/books/v1/volumes"
    user_agent: str = "Chasing-Chapters/1.0"
    client_id: str = "google-books-api"
    search_ttl: float = 300.0
    details_ttl: float = 1800.0
    backend: str = "aiohttp"
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    session_cfg: SessionConfig = field(default_factory=SessionConfig)


@dataclass
class SearchConfig:
    """Configuration for the in-app review search.

    Attributes:
        cache_ttl: Lifetime of cached result pages, in seconds.
        cleanup_interval: Interval of the cache/limiter sweep, in seconds.
        snippet_length: Maximum excerpt snippet length.
    """

    cache_ttl: float = 300.0
    cleanup_interval: float = 300.0
    snippet_length: int = 160
