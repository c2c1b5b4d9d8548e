import json

import pytest

from chapterkit.infra.sessions.response import BaseResponse, Headers


def test_header_lookup_ignores_case():
    h = Headers({"Content-Type": "application/json"})

    assert h["CONTENT-TYPE"] == "application/json"
    assert "content-type" in h
    assert list(h) == ["content-type"]


def test_repeated_fields_keep_arrival_order():
    h = Headers([("Vary", "Origin"), ("Vary", "X-Origin"), ("ETag", "abc")])

    assert h["vary"] == "Origin"
    assert h.get_all("VARY") == ["Origin", "X-Origin"]
    assert len(h) == 2


def test_assignment_replaces_every_value():
    h = Headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
    h["set-cookie"] = "c=3"

    assert h.get_all("Set-Cookie") == ["c=3"]


def test_missing_fields():
    h = Headers()

    assert h.get("x-missing") is None
    assert h.get_all("x-missing") == []
    assert 42 not in h
    with pytest.raises(KeyError):
        del h["x-missing"]


def test_response_coerces_plain_header_mapping():
    resp = BaseResponse(content=b"", headers={"X-RateLimit-Remaining": "99"})

    assert isinstance(resp.headers, Headers)
    assert resp.headers["x-ratelimit-remaining"] == "99"


def test_text_uses_declared_charset():
    resp = BaseResponse(content="Le Père Goriot".encode("latin-1"), encoding="latin-1")
    assert resp.text == "Le Père Goriot"


def test_text_falls_back_to_utf8_then_drops_bad_bytes():
    unknown = BaseResponse(content="Ficciones · Borges".encode(), encoding="bogus")
    broken = BaseResponse(content=b"ok\xff", encoding="utf-8")

    assert unknown.text == "Ficciones · Borges"
    assert broken.text == "ok"


def test_json_body():
    resp = BaseResponse(content=b'{"kind": "books#volumes", "totalItems": 0}')
    assert resp.json() == {"kind": "books#volumes", "totalItems": 0}


def test_json_error_is_a_value_error():
    resp = BaseResponse(content=b"<html>quota</html>")
    with pytest.raises(json.JSONDecodeError):
        resp.json()


@pytest.mark.parametrize(
    ("status", "ok"),
    [(200, True), (204, True), (301, False), (429, False), (503, False)],
)
def test_ok_covers_2xx_only(status, ok):
    assert BaseResponse(content=b"", status=status).ok is ok


@pytest.mark.parametrize(
    ("status", "reason", "expected"),
    [(429, None, "Too Many Requests"), (599, None, ""), (403, "Nope", "Nope")],
)
def test_reason_phrase(status, reason, expected):
    assert BaseResponse(content=b"", status=status, reason=reason).reason == expected


def test_repr_omits_body():
    assert repr(BaseResponse(content=b"abcd", status=201)) == (
        "<BaseResponse status=201 len=4>"
    )
