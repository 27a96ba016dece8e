"""Move previously downloaded pictures into the archive directory."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from bingpotd.errors import ArchiveError

logger = logging.getLogger(__name__)


@dataclass
class RotationReport:
    """Outcome of one rotation pass."""

    moved: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def rotate(
    download_dir: Path,
    archive_dir: Path,
    *,
    flatten: bool = True,
    fail_fast: bool = True,
) -> RotationReport:
    """Move every regular file under `download_dir` into `archive_dir`.

    Both directories are created when missing. Files directly inside
    `download_dir` are always moved; below the top level, names starting
    with ``.`` are left alone and hidden subdirectories are not entered.

    With `flatten` the files land in the archive root by base name, so
    same-named files from different subdirectories overwrite each other.
    Otherwise the relative layout is mirrored under `archive_dir`.

    With `fail_fast` the first failed move raises :class:`ArchiveError`;
    without it failures are collected on the report and the pass continues.
    """
    download_dir = Path(download_dir)
    archive_dir = Path(archive_dir)
    for directory in (download_dir, archive_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArchiveError(f"Could not create directory {directory}: {exc}") from exc

    report = RotationReport()
    for source in _collect_files(download_dir, report, exclude=archive_dir.resolve()):
        relative = source.relative_to(download_dir)
        target = archive_dir / (relative.name if flatten else relative)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(target))
        except OSError as exc:
            if fail_fast:
                raise ArchiveError(f"Could not move {source} to {target}: {exc}") from exc
            logger.warning("Could not archive %s: %s", source, exc)
            report.failures.append((source, str(exc)))
            continue
        report.moved.append(target)

    logger.info("Archived %s file(s) from %s into %s", len(report.moved), download_dir, archive_dir)
    return report


def _collect_files(root: Path, report: RotationReport, *, exclude: Path) -> list[Path]:
    """Walk `root` and return the files to archive, noting hidden ones on `report`.

    `exclude` is the resolved archive directory, never entered when it sits under `root`.
    """

    def _raise(exc: OSError) -> None:
        raise ArchiveError(f"Could not read {exc.filename or root}: {exc}") from exc

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        current = Path(dirpath)
        nested = current != root
        if nested:
            report.skipped.extend(current / name for name in filenames if name.startswith("."))
            filenames = [name for name in filenames if not name.startswith(".")]
            # prune in place so os.walk does not descend into hidden subdirectories
            report.skipped.extend(current / name for name in dirnames if name.startswith("."))
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        dirnames[:] = [name for name in dirnames if (current / name).resolve() != exclude]

        files.extend(path for path in (current / name for name in filenames) if path.is_file())
    return files


__all__ = ["RotationReport", "rotate"]
