from __future__ import annotations

import io
import urllib.error
import urllib.parse
from typing import Any, Callable, Dict, List, Optional, Union

import pytest


class FakeResponse:
    def __init__(self, body: Union[str, bytes]) -> None:
        self._body = body if isinstance(body, bytes) else body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


class FakeTransport:
    """Stands in for urllib.request.urlopen and records every request."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.body: Union[str, bytes] = '{"Code":"OK","Message":"OK","RequestId":"req-1","BizId":"biz-1"}'
        self.status = 200
        self.error: Optional[BaseException] = None

    def __call__(self, req, timeout=None, context=None):
        self.calls.append(
            {
                "url": req.full_url,
                "method": req.get_method(),
                "headers": dict(req.header_items()),
                "fields": dict(urllib.parse.parse_qsl(req.data.decode("utf-8"))),
                "raw_body": req.data.decode("utf-8"),
                "timeout": timeout,
                "context": context,
            }
        )
        if self.error is not None:
            raise self.error
        if self.status >= 400:
            raise urllib.error.HTTPError(
                req.full_url, self.status, "error", {}, io.BytesIO(FakeResponse(self.body).read())
            )
        return FakeResponse(self.body)


@pytest.fixture
def transport(monkeypatch: pytest.MonkeyPatch) -> FakeTransport:
    fake = FakeTransport()
    monkeypatch.setattr("urllib.request.urlopen", fake)
    return fake


@pytest.fixture
def make_client() -> Callable[..., Any]:
    from alisms.core.dysms_client import Client

    def _make(**kwargs: Any) -> Client:
        return Client({"accessKeyId": "testid", "accessKeySecret": "testsecret"}, **kwargs)

    return _make
