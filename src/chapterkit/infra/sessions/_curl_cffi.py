# mypy: disable-error-code=unused-ignore

from typing import Any

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession

from .base import BaseSession
from .response import BaseResponse


class CurlCffiSession(BaseSession):
    """Session backend using curl_cffi, with browser impersonation."""

    backend_name = "curl_cffi"
    transport_errors = (CurlError,)

    def _open(self) -> AsyncSession[Any]:
        cfg = self._cfg
        proxy_auth = (
            (cfg.proxy_user, cfg.proxy_pass)
            if cfg.proxy_user and cfg.proxy_pass
            else None
        )
        return AsyncSession(
            headers=self._headers,
            timeout=cfg.timeout,
            impersonate=cfg.impersonate,  # type: ignore[arg-type]
            verify=cfg.verify_ssl,
            proxy=cfg.proxy,
            proxy_auth=proxy_auth,
            trust_env=cfg.trust_env,
        )

    async def _shutdown(self, client: AsyncSession[Any]) -> None:
        await client.close()

    async def _send(
        self,
        client: AsyncSession[Any],
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
            headers=r.headers,
            reason=r.reason,
            encoding=r.encoding or encoding,
            url=str(r.url),
        )
