"""One picture-of-the-day cycle: resolve, rotate, download."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from bingpotd.archive.rotator import RotationReport, rotate
from bingpotd.config import PotdConfig
from bingpotd.io.fetcher import download
from bingpotd.io.metadata import resolve_picture_url
from bingpotd.util.dates import picture_date, today
from bingpotd.util.manifest import write_cycle_manifest
from bingpotd.util.paths import resolve_dir


@dataclass(frozen=True)
class CycleResult:
    run_date: date
    picture_url: str
    picture_path: Path
    rotation: RotationReport


def run_cycle(
    cfg: PotdConfig,
    *,
    download_dir: Optional[Path] = None,
    archive_dir: Optional[Path] = None,
    day: Optional[date] = None,
    logger: Optional[logging.Logger] = None,
) -> CycleResult:
    """Run resolve -> rotate -> download once.

    Nothing touches the filesystem until the URL is resolved, and a raising
    rotation skips the download. Assumes a single instance runs at a time.
    """
    logger = logger or logging.getLogger("bingpotd")
    run_date = day or today(cfg.runtime.clock)
    pictures = resolve_dir(download_dir or cfg.runtime.download_dir)
    archive = resolve_dir(archive_dir or cfg.runtime.archive_dir)

    source = cfg.source
    url = resolve_picture_url(
        source.endpoint,
        timeout_seconds=source.timeout_seconds,
        retries=source.retries,
        backoff_seconds=source.backoff_seconds,
    )

    report = rotate(pictures, archive, flatten=cfg.archive.flatten, fail_fast=cfg.archive.fail_fast)
    if not report.ok:
        logger.warning("Rotation left %s file(s) in %s", len(report.failures), pictures)

    dl = cfg.download
    path = download(
        url,
        pictures,
        day=run_date,
        timeout_seconds=dl.timeout_seconds,
        retries=dl.retries,
        backoff_seconds=dl.backoff_seconds,
        chunk_size=dl.chunk_size,
        default_extension=dl.default_extension,
    )
    logger.info("Downloaded picture of the day for %s", picture_date(run_date))

    if cfg.runtime.manifest_root is not None:
        write_cycle_manifest(
            path,
            url=url,
            day=picture_date(run_date),
            archived=len(report.moved),
            archive_failures=[source_path for source_path, _ in report.failures],
            root=resolve_dir(cfg.runtime.manifest_root),
        )

    return CycleResult(run_date=run_date, picture_url=url, picture_path=path, rotation=report)


__all__ = ["CycleResult", "run_cycle"]
