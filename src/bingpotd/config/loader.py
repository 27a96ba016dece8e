"""Config loading entry points for bingpotd."""

from __future__ import annotations

import json
import os
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .models import PotdConfig

DEFAULT_CONFIG = resources.files(__package__).joinpath("bingpotd.default.yaml")
ENDPOINT_ENV_VAR = "BINGPOTD_ENDPOINT"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


def load_config(
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> PotdConfig:
    """Load the configuration applying the optional file, environment and overrides.

    Precedence, lowest first: packaged defaults, `path`, ``BINGPOTD_ENDPOINT``,
    `overrides` (dotted keys such as ``runtime.download_dir`` are expanded).
    """

    default_data = _read_defaults()

    if path:
        config_data = _expect_mapping(_read_structured_file(path), path)
    else:
        config_data = {}

    merged: dict[str, Any] = _deep_merge(default_data, config_data)

    env_endpoint = os.getenv(ENDPOINT_ENV_VAR, "").strip()
    if env_endpoint:
        merged = _deep_merge(merged, {"source": {"endpoint": env_endpoint}})

    if overrides:
        merged = _deep_merge(merged, _expand_override_keys(overrides))

    try:
        return PotdConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def dump_example_config(dest: Path) -> None:
    """Write the default configuration to ``dest``."""

    dest.parent.mkdir(parents=True, exist_ok=True)

    merged = _read_defaults()
    if dest.suffix.lower() == ".toml":
        raise ConfigError("TOML export is not supported yet; use a YAML destination.")
    if dest.suffix.lower() in {".json"}:
        dest.write_text(json.dumps(merged, indent=2), encoding="utf-8")
        return
    dest.write_text(
        yaml.safe_dump(merged, sort_keys=False),
        encoding="utf-8",
    )


def _read_defaults() -> dict[str, Any]:
    """Return the packaged defaults, or the model defaults when the file is not installed."""

    if not DEFAULT_CONFIG.is_file():
        return PotdConfig().model_dump(mode="json")
    try:
        payload = yaml.safe_load(DEFAULT_CONFIG.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse packaged defaults: {exc}") from exc
    return _expect_mapping(payload, DEFAULT_CONFIG)


def _expect_mapping(payload: Any, source: Any) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Expected mapping data in {source}, got {type(payload)!r}.")
    return dict(payload)


def _read_structured_file(path: Path) -> Any:
    """Return the parsed contents of a YAML/TOML/JSON file."""

    if not path.exists():
        raise ConfigError(f"Config file {path} does not exist.")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text) or {}
        if suffix == ".toml":
            return tomllib.loads(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc

    raise ConfigError(f"Unsupported config format for {path}")


def _deep_merge(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two mappings returning a new dictionary."""

    result: dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in extra.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(value, Mapping)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_override_keys(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Support dotted-notation overrides like ``archive.flatten``."""

    result: dict[str, Any] = {}
    for key, value in overrides.items():
        converted = _expand_single_override(key, value)
        result = _deep_merge(result, converted)
    return result


def _expand_single_override(key: Any, value: Any) -> dict[str, Any]:
    if isinstance(key, str) and "." in key:
        parts = key.split(".")
        cursor: dict[str, Any] = {}
        root = cursor
        for segment in parts[:-1]:
            next_cursor: dict[str, Any] = {}
            cursor[segment] = next_cursor
            cursor = next_cursor
        cursor[parts[-1]] = value
        return root
    return {key: value}


__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG",
    "ENDPOINT_ENV_VAR",
    "load_config",
    "dump_example_config",
]
