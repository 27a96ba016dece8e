"""Configuration models and loaders for bingpotd."""

from .loader import ENDPOINT_ENV_VAR, ConfigError, DEFAULT_CONFIG, dump_example_config, load_config
from .models import (
    ArchiveConfig,
    DownloadConfig,
    MetadataSourceConfig,
    PotdConfig,
    RuntimeConfig,
)

__all__ = [
    "ArchiveConfig",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DownloadConfig",
    "ENDPOINT_ENV_VAR",
    "MetadataSourceConfig",
    "PotdConfig",
    "RuntimeConfig",
    "dump_example_config",
    "load_config",
]
