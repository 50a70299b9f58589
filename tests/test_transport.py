from __future__ import annotations

import json

import pytest
import requests

import sheet_uploader.transport as transport_mod
from sheet_uploader import UPLOAD_URL
from sheet_uploader.errors import TransportError
from sheet_uploader.models import UploadPayload
from sheet_uploader.transport import post_payload


class _FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "ok") -> None:
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)  # type: ignore[arg-type]


@pytest.fixture
def payload() -> UploadPayload:
    return UploadPayload(
        id="abc", column_names=["name", "age"], rows=[["Alice", "30"], ["Bob", "25"]]
    )


def test_post_payload_sends_json_and_returns_raw_text(
    monkeypatch: pytest.MonkeyPatch, payload: UploadPayload
) -> None:
    calls: list[dict[str, object]] = []

    def _fake_post(url: str, **kwargs: object) -> _FakeResponse:
        calls.append({"url": url, **kwargs})
        return _FakeResponse(text='{"status": "stored"}')

    monkeypatch.setattr(transport_mod.requests, "post", _fake_post)

    result = post_payload(payload)

    assert result == '{"status": "stored"}'
    assert len(calls) == 1
    assert calls[0]["url"] == UPLOAD_URL
    assert calls[0]["headers"] == {"Content-Type": "application/json"}
    assert "timeout" not in calls[0]
    body = calls[0]["data"]
    assert isinstance(body, bytes)
    assert json.loads(body.decode("utf-8")) == {
        "id": "abc",
        "columnNames": ["name", "age"],
        "size": {"cols": 2, "rows": 2},
        "rows": [["Alice", "30"], ["Bob", "25"]],
    }


def test_post_payload_uses_given_url(
    monkeypatch: pytest.MonkeyPatch, payload: UploadPayload
) -> None:
    seen: list[str] = []

    def _fake_post(url: str, **_kwargs: object) -> _FakeResponse:
        seen.append(url)
        return _FakeResponse()

    monkeypatch.setattr(transport_mod.requests, "post", _fake_post)

    post_payload(payload, url="https://example.test/upload")

    assert seen == ["https://example.test/upload"]


def test_post_payload_network_error_raises_transport_error(
    monkeypatch: pytest.MonkeyPatch, payload: UploadPayload
) -> None:
    attempts: list[str] = []

    def _fake_post(url: str, **_kwargs: object) -> _FakeResponse:
        attempts.append(url)
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(transport_mod.requests, "post", _fake_post)

    with pytest.raises(TransportError, match="connection refused") as excinfo:
        post_payload(payload)

    assert excinfo.value.kind == "transport"
    assert len(attempts) == 1


def test_post_payload_http_error_status_raises_transport_error(
    monkeypatch: pytest.MonkeyPatch, payload: UploadPayload
) -> None:
    monkeypatch.setattr(
        transport_mod.requests, "post", lambda url, **_kw: _FakeResponse(500, "oops")
    )

    with pytest.raises(TransportError, match="HTTP 500"):
        post_payload(payload)
