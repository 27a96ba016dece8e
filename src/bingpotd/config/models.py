"""Pydantic models describing bingpotd configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MetadataSourceConfig(BaseModel):
    """Where the picture-of-the-day URL is looked up."""

    model_config = ConfigDict(extra="allow")

    endpoint: str = "https://bing.biturl.top"
    timeout_seconds: float = Field(default=30, gt=0)
    retries: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0)


class DownloadConfig(BaseModel):
    """Image download policy."""

    model_config = ConfigDict(extra="allow")

    timeout_seconds: float = Field(default=60, gt=0)
    retries: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0)
    chunk_size: int = Field(default=8192, ge=1)
    default_extension: str = "txt"

    @field_validator("default_extension")
    @classmethod
    def _strip_dot(cls, value: str) -> str:
        value = value.strip().lstrip(".")
        if not value or "/" in value:
            raise ValueError("default_extension must be a bare suffix such as 'txt'.")
        return value


class ArchiveConfig(BaseModel):
    """Rotation behaviour for previously downloaded files."""

    model_config = ConfigDict(extra="allow")

    flatten: bool = True
    fail_fast: bool = True


class RuntimeConfig(BaseModel):
    """Execution-time settings such as workspace directories."""

    model_config = ConfigDict(extra="allow")

    download_dir: Path = Path("./data/pictures")
    archive_dir: Path = Path("./data/archive")
    clock: Literal["utc", "local"] = "utc"
    manifest_root: Optional[Path] = None
    log_file: Optional[Path] = None


class PotdConfig(BaseModel):
    """Root configuration object."""

    model_config = ConfigDict(extra="allow")

    source: MetadataSourceConfig = Field(default_factory=MetadataSourceConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)


__all__ = [
    "ArchiveConfig",
    "DownloadConfig",
    "MetadataSourceConfig",
    "PotdConfig",
    "RuntimeConfig",
]
