import asyncio
from typing import Any

import aiohttp

from .base import BaseSession
from .response import BaseResponse


class AiohttpSession(BaseSession):
    """Session backend implemented with aiohttp."""

    backend_name = "aiohttp"
    transport_errors = (aiohttp.ClientError, asyncio.TimeoutError)

    def _open(self) -> aiohttp.ClientSession:
        cfg = self._cfg
        proxy_auth = (
            aiohttp.BasicAuth(cfg.proxy_user, cfg.proxy_pass)
            if cfg.proxy_user and cfg.proxy_pass
            else None
        )
        return aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(
                ssl=cfg.verify_ssl,
                limit_per_host=cfg.max_connections,
            ),
            timeout=aiohttp.ClientTimeout(total=cfg.timeout),
            headers=self._headers,
            trust_env=cfg.trust_env,
            proxy=cfg.proxy,
            proxy_auth=proxy_auth,
        )

    async def _shutdown(self, client: aiohttp.ClientSession) -> None:
        if not client.closed:
            await client.close()

    async def _send(
        self,
        client: aiohttp.ClientSession,
        url: str,
        *,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        encoding: str,
    ) -> BaseResponse:
        async with client.get(url, params=params, headers=headers) as r:
            return BaseResponse(
                content=await r.read(),
                status=r.status,
                headers=r.headers,
                reason=r.reason,
                encoding=r.charset or encoding,
                url=str(r.url),
            )
