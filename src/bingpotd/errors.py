"""Typed failures surfaced by a picture-of-the-day cycle."""

from __future__ import annotations


class PotdError(RuntimeError):
    """Base class for every failure that aborts a cycle.

    ``stage`` names the step that failed (``resolve``, ``rotate`` or
    ``download``) and ``exit_code`` is what the CLI exits with.
    """

    stage = "cycle"
    exit_code = 1

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class RequestError(PotdError):
    """Network/transport failure or an HTTP error status."""

    stage = "resolve"
    exit_code = 10


class DecodeError(PotdError):
    """Metadata body is not a JSON mapping of string to string."""

    stage = "resolve"
    exit_code = 11


class MissingFieldError(PotdError):
    """Metadata body lacks the expected field."""

    stage = "resolve"
    exit_code = 12


class ArchiveError(PotdError):
    """Directory creation, traversal or move failed during rotation."""

    stage = "rotate"
    exit_code = 20


class FileCreateError(PotdError):
    stage = "download"
    exit_code = 30


class BodyReadError(PotdError):
    stage = "download"
    exit_code = 31


class WriteError(PotdError):
    stage = "download"
    exit_code = 32


__all__ = [
    "ArchiveError",
    "BodyReadError",
    "DecodeError",
    "FileCreateError",
    "MissingFieldError",
    "PotdError",
    "RequestError",
    "WriteError",
]
