from typing import Any

import httpx

from .base import BaseSession
from .response import BaseResponse


class HttpxSession(BaseSession):
    """Session backend based on httpx, with optional HTTP/2."""

    backend_name = "httpx"
    transport_errors = (httpx.TransportError,)

    def _open(self) -> httpx.AsyncClient:
        cfg = self._cfg
        return httpx.AsyncClient(
            http2=cfg.http2,
            timeout=cfg.timeout,
            verify=cfg.verify_ssl,
            headers=self._headers,
            limits=httpx.Limits(
                max_keepalive_connections=cfg.max_connections,
                max_connections=cfg.max_connections,
            ),
            proxy=self._proxy(),
            trust_env=cfg.trust_env,
            follow_redirects=True,
        )

    async def _shutdown(self, client: httpx.AsyncClient) -> None:
        if not client.is_closed:
            await client.aclose()

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        encoding: str,
    ) -> BaseResponse:
        r = await client.get(url, params=params, headers=headers)
        return BaseResponse(
            content=r.content,
            status=r.status_code,
            headers=r.headers.multi_items(),
            reason=r.reason_phrase,
            encoding=r.charset_encoding or encoding,
            url=str(r.url),
        )

    def _proxy(self) -> str | httpx.Proxy | None:
        """Attaches proxy credentials unless the URL already carries them."""
        cfg = self._cfg
        if not cfg.proxy:
            return None
        if "@" not in cfg.proxy and cfg.proxy_user and cfg.proxy_pass:
            return httpx.Proxy(cfg.proxy, auth=(cfg.proxy_user, cfg.proxy_pass))
        return cfg.proxy
