from __future__ import annotations

import json
from typing import Any

from chapterkit.infra.sessions import BaseResponse


def json_response(data: Any, status: int = 200) -> BaseResponse:
    return BaseResponse(content=json.dumps(data).encode(), status=status)


class FakeSession:
    """In-memory stand-in for a session backend.

    Responses are served in order; an exception instance in the queue is
    raised instead of returned.
    """

    def __init__(self, *responses: BaseResponse | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.initialized = False
        self.closed = False
        self.headers: dict[str, str] = {}

    async def init(self, **kwargs: Any) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True

    async def get(self, url: str, **kwargs: Any) -> BaseResponse:
        self.calls.append((url, dict(kwargs.get("params") or {})))
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def volume(book_id: str = "vol1", **info: Any) -> dict[str, Any]:
    return {"kind": "books#volume", "id": book_id, "volumeInfo": info}
