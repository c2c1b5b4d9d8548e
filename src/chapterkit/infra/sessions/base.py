from __future__ import annotations

import abc
import logging
import types
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from chapterkit.infra.http_defaults import DEFAULT_USER_HEADERS
from chapterkit.schemas import SessionConfig

from .response import BaseResponse

logger = logging.getLogger(__name__)

QueryParams = Mapping[str, str | int | float]


class BaseSession(abc.ABC):
    """Async GET-only HTTP client shared by the metadata providers.

    A backend adapts one HTTP library by opening and closing the library's
    client and sending a single request. Everything else lives here: the
    default headers, the initialization check, and translation of the
    library's transport failures into the builtin :class:`ConnectionError`.

    Non-2xx statuses are returned as responses, never raised.
    """

    backend_name: ClassVar[str]
    transport_errors: ClassVar[tuple[type[BaseException], ...]] = ()

    def __init__(self, cfg: SessionConfig | None = None, **kwargs: Any) -> None:
        """Initializes the session using the provided configuration.

        Args:
            cfg: Optional configuration object defining session behavior.
            **kwargs: Additional parameters reserved for backend-specific
                initialization.
        """
        self._cfg = cfg or SessionConfig()
        self._client: Any = None

        self._headers = (
            dict(self._cfg.headers)
            if self._cfg.headers is not None
            else DEFAULT_USER_HEADERS.copy()
        )
        if self._cfg.user_agent:
            self._headers["User-Agent"] = self._cfg.user_agent

    @property
    def headers(self) -> dict[str, str]:
        """A copy of the headers sent with every request."""
        return self._headers.copy()

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def init(self, **kwargs: Any) -> None:
        """Opens the underlying client. Calling it again is a no-op."""
        if self._client is None:
            self._client = self._open()

    async def close(self) -> None:
        """Closes the underlying client. Calling it again is a no-op."""
        client, self._client = self._client, None
        if client is not None:
            await self._shutdown(client)

    async def get(
        self,
        url: str,
        *,
        params: QueryParams | None = None,
        headers: Mapping[str, str] | None = None,
        encoding: str = "utf-8",
    ) -> BaseResponse:
        """Performs an HTTP GET request.

        Args:
            url: Target URL.
            params: Query string parameters.
            headers: Extra headers for this request only.
            encoding: Charset assumed when the server declares none.

        Returns:
            BaseResponse: The fully read response, whatever its status.

        Raises:
            RuntimeError: If the session has not been initialized.
            ConnectionError: If the request fails at the transport level
                (DNS, connect, TLS, timeout).
        """
        if self._client is None:
            raise RuntimeError(
                f"{type(self).__name__} is not initialized or has been closed."
            )

        try:
            resp = await self._send(
                self._client,
                url,
                params=dict(params) if params else None,
                headers=dict(headers) if headers else None,
                encoding=encoding,
            )
        except self.transport_errors as e:
            logger.debug("GET %s via %s failed: %r", url, self.backend_name, e)
            raise ConnectionError(f"GET {url} failed: {e!r}") from e

        logger.debug("GET %s -> %d (%s)", url, resp.status, self.backend_name)
        return resp

    @abc.abstractmethod
    def _open(self) -> Any:
        """Creates the library client. Runs inside the event loop."""
        ...

    @abc.abstractmethod
    async def _shutdown(self, client: Any) -> None:
        ...

    @abc.abstractmethod
    async def _send(
        self,
        client: Any,
        url: str,
        *,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        encoding: str,
    ) -> BaseResponse:
        """Sends one GET and reads the whole body."""
        ...

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
