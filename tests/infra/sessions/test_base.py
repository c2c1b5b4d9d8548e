from __future__ import annotations

import logging
from typing import Any

import pytest

from chapterkit.infra.sessions import BaseResponse, BaseSession
from chapterkit.schemas import SessionConfig


class FlakyTransport(Exception):
    pass


class RecordingSession(BaseSession):
    backend_name = "recording"
    transport_errors = (FlakyTransport,)

    def __init__(self, cfg=None, **kwargs):
        super().__init__(cfg, **kwargs)
        self.opened = 0
        self.closed = 0
        self.sent: list[tuple[str, Any, Any]] = []
        self.fail_with: BaseException | None = None

    def _open(self):
        self.opened += 1
        return object()

    async def _shutdown(self, client):
        self.closed += 1

    async def _send(self, client, url, *, params, headers, encoding):
        self.sent.append((url, params, headers))
        if self.fail_with is not None:
            raise self.fail_with
        return BaseResponse(content=b"{}", status=200, encoding=encoding)


@pytest.mark.asyncio
async def test_open_and_shutdown_run_once():
    s = RecordingSession()
    assert not s.is_open

    await s.init()
    await s.init()
    assert s.is_open

    await s.close()
    await s.close()
    assert not s.is_open
    assert (s.opened, s.closed) == (1, 1)


@pytest.mark.asyncio
async def test_params_and_headers_are_copied():
    params = {"q": "dune"}
    async with RecordingSession() as s:
        await s.get("https://books.test/v", params=params, headers={"X-A": "1"})

    url, sent_params, sent_headers = s.sent[0]
    assert url == "https://books.test/v"
    assert sent_params == {"q": "dune"}
    assert sent_params is not params
    assert sent_headers == {"X-A": "1"}


@pytest.mark.asyncio
async def test_empty_params_are_sent_as_none():
    async with RecordingSession() as s:
        await s.get("https://books.test/v", params={})

    assert s.sent[0][1] is None


@pytest.mark.asyncio
async def test_transport_error_becomes_connection_error(caplog):
    async with RecordingSession() as s:
        s.fail_with = FlakyTransport("reset by peer")
        with caplog.at_level(logging.DEBUG, logger="chapterkit.infra.sessions"):
            with pytest.raises(ConnectionError) as exc_info:
                await s.get("https://books.test/v")

    assert isinstance(exc_info.value.__cause__, FlakyTransport)
    assert "reset by peer" in caplog.text


@pytest.mark.asyncio
async def test_other_errors_propagate_unchanged():
    async with RecordingSession() as s:
        s.fail_with = KeyError("boom")
        with pytest.raises(KeyError):
            await s.get("https://books.test/v")


def test_default_headers_without_config():
    s = RecordingSession()
    assert "User-Agent" in s.headers


def test_explicit_headers_replace_defaults():
    s = RecordingSession(SessionConfig(headers={"Accept": "application/json"}))
    assert s.headers == {"Accept": "application/json"}
