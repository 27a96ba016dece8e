from __future__ import annotations

import json
from typing import Any, Iterator, Mapping

import requests
from requests.structures import CaseInsensitiveDict

METADATA_ENDPOINT = "https://metadata.test"
PICTURE_URL = "https://example.com/img.png"


class DummyResponse:
    """Just enough of requests.Response for the resolver and downloader."""

    def __init__(
        self,
        content: bytes = b"",
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        fail_after: int | None = None,
    ) -> None:
        self.content = content
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.fail_after = fail_after
        self.closed = False

    @classmethod
    def json_body(cls, payload: Any, status_code: int = 200) -> "DummyResponse":
        return cls(json.dumps(payload).encode("utf-8"), status_code, {"content-type": "application/json"})

    def json(self) -> Any:
        return json.loads(self.content.decode("utf-8"))

    def iter_content(self, chunk_size: int = 8192) -> Iterator[bytes]:
        for count, idx in enumerate(range(0, len(self.content), chunk_size)):
            if self.fail_after is not None and count >= self.fail_after:
                raise requests.exceptions.ChunkedEncodingError("connection dropped")
            yield self.content[idx : idx + chunk_size]

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def close(self) -> None:
        self.closed = True


class FakeHttp:
    """Stand-in for requests.get that serves canned responses by URL."""

    def __init__(self, routes: Mapping[str, DummyResponse | Exception]) -> None:
        self.routes = dict(routes)
        self.calls: list[str] = []

    def __call__(self, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append(url)
        outcome = self.routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
