from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from chapterkit.schemas import (
    ProviderConfig,
    RateLimitConfig,
    SearchConfig,
    SessionConfig,
)

DEFAULT_API_KEY_ENV = "GOOGLE_BOOKS_API_KEY"


class ConfigAdapter:
    """High-level accessor for general and provider-specific configuration.

    All configuration resolution follows the order:

    **general -> provider-specific -> built-in defaults**

    Args:
        config (dict[str, Any]): Fully loaded configuration mapping containing
            a ``general`` block and optionally a ``providers`` block.
        environ (Mapping[str, str] | None): Environment used to resolve API
            keys. Defaults to ``os.environ``.
    """

    def __init__(
        self,
        config: dict[str, Any],
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config: dict[str, Any] = dict(config)
        self._environ = os.environ if environ is None else environ

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_provider_config(self, provider: str = "google_books") -> ProviderConfig:
        """Build a ProviderConfig by merging general and provider overrides.

        The API key comes from the provider block first, then from the
        environment variable named by ``api_key_env``. An empty value is
        treated as missing.

        Args:
            provider (str): Provider key, e.g. ``"google_books"``.

        Returns:
            ProviderConfig: Resolved provider configuration.
        """
        provider_cfg, general_cfg = self._provider_cfg(provider), self._gen_cfg()
        cfg = {**general_cfg, **provider_cfg}
        defaults = ProviderConfig()

        return ProviderConfig(
            api_key=self._resolve_api_key(provider_cfg),
            base_url=cfg.get("base_url", defaults.base_url),
            user_agent=cfg.get("user_agent") or defaults.user_agent,
            client_id=cfg.get("client_id", defaults.client_id),
            search_ttl=float(cfg.get("search_ttl", defaults.search_ttl)),
            details_ttl=float(cfg.get("details_ttl", defaults.details_ttl)),
            backend=cfg.get("backend", defaults.backend),
            rate_limit=self.get_rate_limit_config(provider),
            session_cfg=self.get_session_config(provider),
        )

    def get_rate_limit_config(self, provider: str = "google_books") -> RateLimitConfig:
        """Build a RateLimitConfig by merging general and provider overrides."""
        provider_cfg, general_cfg = self._provider_cfg(provider), self._gen_cfg()
        cfg = {**general_cfg, **provider_cfg}

        return RateLimitConfig(
            max_requests=int(cfg.get("max_requests", 100)),
            window_seconds=float(cfg.get("window_seconds", 60.0)),
        )

    def get_session_config(self, provider: str = "google_books") -> SessionConfig:
        """Build a SessionConfig by merging general and provider overrides.

        Args:
            provider (str): Target provider key.

        Returns:
            SessionConfig: Resolved session configuration.
        """
        provider_cfg, general_cfg = self._provider_cfg(provider), self._gen_cfg()
        cfg = {**general_cfg, **provider_cfg}

        return SessionConfig(
            timeout=cfg.get("timeout", 10.0),
            max_connections=cfg.get("max_connections", 10),
            user_agent=cfg.get("user_agent"),
            headers=cfg.get("headers"),
            impersonate=cfg.get("impersonate", "chrome"),
            verify_ssl=cfg.get("verify_ssl", True),
            http2=cfg.get("http2", True),
            trust_env=cfg.get("trust_env", False),
            proxy=cfg.get("proxy"),
            proxy_user=cfg.get("proxy_user"),
            proxy_pass=cfg.get("proxy_pass"),
        )

    def get_search_config(self) -> SearchConfig:
        """Build the review search settings from ``general.search``."""
        search_cfg = self._gen_cfg().get("search") or {}

        return SearchConfig(
            cache_ttl=float(search_cfg.get("cache_ttl", 300.0)),
            cleanup_interval=float(search_cfg.get("cleanup_interval", 300.0)),
            snippet_length=int(search_cfg.get("snippet_length", 160)),
        )

    def get_log_level(self) -> str:
        """Return the configured log level name, ``"INFO"`` by default."""
        level = self._gen_cfg().get("log_level")
        return level.upper() if isinstance(level, str) and level else "INFO"

    def _resolve_api_key(self, provider_cfg: dict[str, Any]) -> str | None:
        key = provider_cfg.get("api_key")
        if isinstance(key, str) and key.strip():
            return key.strip()

        env_name = provider_cfg.get("api_key_env") or DEFAULT_API_KEY_ENV
        env_key = self._environ.get(env_name, "").strip()
        return env_key or None

    def _gen_cfg(self) -> dict[str, Any]:
        """Return the ``general`` configuration block."""
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}

    def _provider_cfg(self, provider: str) -> dict[str, Any]:
        """Return the configuration block of ``provider``."""
        providers = self._config.get("providers")
        if not isinstance(providers, dict):
            return {}
        block = providers.get(provider)
        return block if isinstance(block, dict) else {}
