"""Run manifests: one JSON record per successful cycle, for auditing the archive."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

MANIFEST_SUBDIR = Path("logs") / "run_manifests"


def write_cycle_manifest(
    picture: Path,
    *,
    url: str,
    day: str,
    archived: int,
    archive_failures: Sequence[Path] = (),
    root: Path,
) -> Path:
    """Record the saved `picture` under root/logs/run_manifests/cycle_<day>_<stamp>.json.

    The record carries the picture's size and SHA-256 so a later copy in the
    archive can be checked against what was downloaded.
    """
    written_at = datetime.now(UTC)
    payload = {
        "date": day,
        "url": url,
        "path": str(picture),
        "bytes": picture.stat().st_size,
        "sha256": _digest(picture),
        "archived": archived,
        "archive_failures": [str(path) for path in archive_failures],
        "written_at": written_at.isoformat(timespec="seconds"),
    }

    manifests_dir = root / MANIFEST_SUBDIR
    manifests_dir.mkdir(parents=True, exist_ok=True)
    dest = manifests_dir / f"cycle_{day}_{written_at:%H%M%S%f}.json"
    dest.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return dest


def _digest(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


__all__ = ["MANIFEST_SUBDIR", "write_cycle_manifest"]
