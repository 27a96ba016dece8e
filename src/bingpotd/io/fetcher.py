"""Download the picture of the day into the working directory."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path

import requests

from bingpotd.errors import BodyReadError, FileCreateError, PotdError, RequestError, WriteError
from bingpotd.util.dates import Clock, picture_date, today
from bingpotd.util.retry import retry

DEFAULT_EXTENSION = "txt"

BROWSER_HEADERS: Mapping[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
}

logger = logging.getLogger(__name__)


def get_file_extension(response: requests.Response) -> str | None:
    """Return the content-type subtype of `response`, or None if it cannot be parsed.

    ``image/jpeg; charset=binary`` yields ``jpeg``.
    """
    value = response.headers.get("content-type")
    if not value or not value.isascii() or "/" not in value:
        return None
    media_type = value.split(";", 1)[0]
    subtype = media_type.rsplit("/", 1)[-1].strip().lower()
    return subtype or None


def download(
    url: str,
    destination_dir: Path,
    *,
    day: date | None = None,
    clock: Clock = "utc",
    timeout_seconds: float | None = None,
    retries: int = 1,
    backoff_seconds: float = 1.0,
    chunk_size: int = 8192,
    default_extension: str = DEFAULT_EXTENSION,
    headers: Mapping[str, str] | None = None,
) -> Path:
    """Stream `url` into ``destination_dir/<YYYY-M-D>.<ext>`` and return that path.

    The body is written to a ``.part`` sibling first and moved over the
    destination once complete, so an existing file for the same day is
    replaced only by a whole download.
    """
    try:
        destination_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileCreateError(f"Could not create download directory {destination_dir}: {exc}") from exc

    merged_headers = dict(BROWSER_HEADERS)
    if headers:
        merged_headers.update(headers)

    def _request() -> requests.Response:
        try:
            response = requests.get(url, stream=True, timeout=timeout_seconds, headers=merged_headers)
        except requests.RequestException as exc:
            raise RequestError(f"Download of {url} failed: {exc}", stage="download") from exc
        try:
            response.raise_for_status()
        except requests.RequestException as exc:
            # release the pooled connection before a retry opens another
            response.close()
            raise RequestError(f"Download of {url} failed: {exc}", stage="download") from exc
        return response

    response = retry(
        _request,
        attempts=max(1, retries),
        backoff_seconds=backoff_seconds,
        retry_on=(RequestError,),
    )

    try:
        extension = get_file_extension(response)
        if extension is None:
            logger.info("No usable content-type for %s; using .%s", url, default_extension)
            extension = default_extension

        dest = destination_dir / f"{picture_date(day or today(clock))}.{extension}"
        tmp_path = dest.with_name(dest.name + ".part")
        try:
            _stream_to(response, tmp_path, dest=dest, chunk_size=chunk_size)
            tmp_path.replace(dest)
        except OSError as exc:
            _discard(tmp_path)
            raise WriteError(f"Could not move download into {dest}: {exc}") from exc
        except PotdError:
            _discard(tmp_path)
            raise
    finally:
        response.close()

    logger.info("Saved %s -> %s", url, dest)
    return dest


def _stream_to(response: requests.Response, path: Path, *, dest: Path, chunk_size: int) -> None:
    try:
        handle = path.open("wb")
    except OSError as exc:
        raise FileCreateError(f"Could not create {dest}: {exc}") from exc

    chunks = response.iter_content(chunk_size=chunk_size)
    with handle:
        while True:
            try:
                chunk = next(chunks, None)
            except requests.RequestException as exc:
                raise BodyReadError(f"Reading body for {dest} failed: {exc}") from exc
            if chunk is None:
                break
            if not chunk:
                continue
            try:
                handle.write(chunk)
            except OSError as exc:
                raise WriteError(f"Could not write {dest}: {exc}") from exc


def _discard(path: Path) -> None:
    if path.is_file():
        path.unlink(missing_ok=True)


__all__ = ["DEFAULT_EXTENSION", "download", "get_file_extension"]
