"""
Pluggable async HTTP sessions.

Providers talk to the network through :class:`BaseSession`; the concrete
library (aiohttp, httpx or curl_cffi) is picked by name from the
configuration and imported only when selected.
"""

__all__ = ["BACKENDS", "create_session", "BaseResponse", "BaseSession"]

from typing import Any

from chapterkit.schemas import SessionConfig

from .base import BaseSession
from .response import BaseResponse

BACKENDS = ("aiohttp", "httpx", "curl_cffi")


def create_session(
    backend: str,
    cfg: SessionConfig | None = None,
    **kwargs: Any,
) -> BaseSession:
    """Build an unopened session for ``backend``.

    Args:
        backend: One of :data:`BACKENDS`.
        cfg: Session settings; defaults apply when omitted.
        **kwargs: Passed through to the backend constructor.

    Raises:
        ValueError: For a backend name not in :data:`BACKENDS`.
        ImportError: If the backend's library is not installed.
    """
    match backend:
        case "aiohttp":
            from ._aiohttp import AiohttpSession as session_cls
        case "httpx":
            from ._httpx import HttpxSession as session_cls
        case "curl_cffi":
            from ._curl_cffi import CurlCffiSession as session_cls
        case _:
            raise ValueError(
                f"Unsupported backend: {backend!r} (expected one of {BACKENDS})"
            )
    return session_cls(cfg, **kwargs)
