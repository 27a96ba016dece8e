"""Resolve the picture-of-the-day image URL from the metadata endpoint."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

from bingpotd.errors import DecodeError, MissingFieldError, RequestError
from bingpotd.util.retry import retry

DEFAULT_ENDPOINT = "https://bing.biturl.top"
URL_FIELD = "url"

logger = logging.getLogger(__name__)


def resolve_picture_url(
    endpoint: str = DEFAULT_ENDPOINT,
    *,
    timeout_seconds: float | None = None,
    retries: int = 1,
    backoff_seconds: float = 1.0,
    headers: Mapping[str, str] | None = None,
) -> str:
    """Return the ``url`` field of the JSON object served at `endpoint`.

    Transport failures are retried `retries` times in total; malformed or
    incomplete payloads fail immediately.
    """

    def _fetch() -> Any:
        try:
            response = requests.get(endpoint, timeout=timeout_seconds, headers=dict(headers or {}))
            response.raise_for_status()
        except requests.RequestException as exc:
            raise RequestError(f"Metadata request to {endpoint} failed: {exc}", stage="resolve") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Metadata from {endpoint} is not valid JSON: {exc}") from exc

    payload = retry(
        _fetch,
        attempts=max(1, retries),
        backoff_seconds=backoff_seconds,
        retry_on=(RequestError,),
    )
    body = _expect_string_mapping(payload, endpoint)

    if URL_FIELD not in body:
        raise MissingFieldError(f"Metadata from {endpoint} has no '{URL_FIELD}' field")

    url = body[URL_FIELD]
    logger.info("Resolved picture of the day %s", url)
    return url


def _expect_string_mapping(payload: Any, endpoint: str) -> dict[str, str]:
    if not isinstance(payload, Mapping):
        raise DecodeError(f"Expected a JSON object from {endpoint}, got {type(payload).__name__}")
    for key, value in payload.items():
        if not isinstance(value, str):
            raise DecodeError(f"Field '{key}' from {endpoint} is {type(value).__name__}, expected string")
    return dict(payload)


__all__ = ["DEFAULT_ENDPOINT", "resolve_picture_url"]
