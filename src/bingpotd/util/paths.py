"""Path utilities for the download and archive directories."""

from __future__ import annotations

from pathlib import Path


def resolve_dir(path: str | Path) -> Path:
    """Return `path` with ``~`` expanded, made absolute."""
    return Path(path).expanduser().resolve()


__all__ = ["resolve_dir"]
