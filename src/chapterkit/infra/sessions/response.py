"""
Backend-neutral HTTP response objects.

Every session backend converts its library's response into a
:class:`BaseResponse`, so providers never touch aiohttp, httpx or
curl_cffi types directly.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

HeaderSource = Mapping[str, str] | Iterable[tuple[str, str]]


class Headers(MutableMapping[str, str]):
    """Case-insensitive header mapping that keeps repeated fields.

    Item access returns the first value of a field and :meth:`get_all`
    returns every value in arrival order. Assignment replaces all values
    of a field; :meth:`add` appends one.

    Args:
        headers: Optional mapping or sequence of ``(name, value)`` pairs.
            Multi-value mappings (such as aiohttp's) contribute every pair.
    """

    __slots__ = ("_fields",)

    def __init__(self, headers: HeaderSource | None = None) -> None:
        self._fields: dict[str, list[str]] = {}
        pairs = headers.items() if isinstance(headers, Mapping) else headers or ()
        for name, value in pairs:
            self.add(name, value)

    def add(self, key: str, value: str | None) -> None:
        self._fields.setdefault(key.lower(), []).append(value or "")

    def get_all(self, key: str) -> list[str]:
        return list(self._fields.get(key.lower(), ()))

    def __getitem__(self, key: str) -> str:
        values = self._fields.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __setitem__(self, key: str, value: str) -> None:
        self._fields[key.lower()] = [value]

    def __delitem__(self, key: str) -> None:
        try:
            del self._fields[key.lower()]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def __repr__(self) -> str:
        return f"<Headers {dict(self.items())!r}>"


@dataclass(slots=True, kw_only=True, repr=False)
class BaseResponse:
    """A fully read HTTP response.

    Attributes:
        content: Raw response body.
        status: HTTP status code.
        headers: Response headers.
        reason: Status text. Derived from ``status`` when not supplied.
        encoding: Charset tried first when decoding :attr:`text`.
        url: Final URL after redirects, if the backend reports it.
    """

    content: bytes
    status: int = 200
    headers: Headers = field(default_factory=Headers)
    reason: str | None = None
    encoding: str = "utf-8"
    url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)
        if self.reason is None:
            self.reason = _default_reason(self.status)

    @property
    def text(self) -> str:
        """The body decoded with :attr:`encoding`, then UTF-8.

        Undecodable bytes are dropped as a last resort.
        """
        for enc in (self.encoding, "utf-8"):
            try:
                return self.content.decode(enc)
            except (UnicodeDecodeError, LookupError):
                continue
        return self.content.decode("utf-8", errors="ignore")

    def json(self) -> Any:
        """Parses the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON.
        """
        return json.loads(self.text)

    @property
    def ok(self) -> bool:
        """Whether the status is in the 2xx range."""
        return 200 <= self.status < 300

    def __repr__(self) -> str:
        return f"<BaseResponse status={self.status} len={len(self.content)}>"


def _default_reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""
