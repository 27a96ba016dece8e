from __future__ import annotations

import json
import os
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import yaml

from bingpotd.config import DEFAULT_CONFIG, ConfigError, ENDPOINT_ENV_VAR, dump_example_config, load_config
from bingpotd.config import loader as config_loader


class ConfigLoaderTests(unittest.TestCase):
    def test_load_config_defaults(self) -> None:
        with patch.dict(os.environ, {ENDPOINT_ENV_VAR: ""}, clear=False):
            config = load_config()

        self.assertEqual(config.source.endpoint, "https://bing.biturl.top")
        self.assertEqual(config.download.default_extension, "txt")
        self.assertTrue(config.archive.flatten)
        self.assertTrue(config.archive.fail_fast)
        self.assertEqual(config.runtime.download_dir, Path("data/pictures"))
        self.assertEqual(config.runtime.archive_dir, Path("data/archive"))
        self.assertEqual(config.runtime.clock, "utc")
        self.assertIsNone(config.runtime.manifest_root)

    def test_defaults_ship_inside_the_package(self) -> None:
        self.assertTrue(DEFAULT_CONFIG.is_file())
        self.assertEqual(
            Path(str(DEFAULT_CONFIG)).resolve().parent,
            Path(config_loader.__file__).resolve().parent,
        )

    def test_model_defaults_used_when_defaults_file_absent(self) -> None:
        with TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "bingpotd.default.yaml"
            with patch("bingpotd.config.loader.DEFAULT_CONFIG", missing), patch.dict(
                os.environ, {ENDPOINT_ENV_VAR: ""}, clear=False
            ):
                config = load_config()
                dest = Path(tmpdir) / "dumped.yaml"
                dump_example_config(dest)
                dumped = yaml.safe_load(dest.read_text(encoding="utf-8"))

        self.assertEqual(config.source.endpoint, "https://bing.biturl.top")
        self.assertEqual(config.runtime.download_dir, Path("data/pictures"))
        self.assertTrue(config.archive.fail_fast)
        self.assertEqual(dumped["runtime"]["archive_dir"], "data/archive")

    def test_load_config_applies_overrides(self) -> None:
        overrides = {
            "source.retries": 5,
            "archive": {"fail_fast": False},
            "runtime.download_dir": "/srv/potd/today",
        }

        with patch.dict(os.environ, {ENDPOINT_ENV_VAR: ""}, clear=False):
            config = load_config(overrides=overrides)

        self.assertEqual(config.source.retries, 5)
        self.assertFalse(config.archive.fail_fast)
        self.assertTrue(config.archive.flatten)
        self.assertEqual(config.runtime.download_dir, Path("/srv/potd/today"))

    def test_config_file_is_merged_over_defaults(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "potd.yaml"
            path.write_text("download:\n  default_extension: .bin\nruntime:\n  clock: local\n", encoding="utf-8")

            with patch.dict(os.environ, {ENDPOINT_ENV_VAR: ""}, clear=False):
                config = load_config(path)

        self.assertEqual(config.download.default_extension, "bin")
        self.assertEqual(config.download.chunk_size, 8192)
        self.assertEqual(config.runtime.clock, "local")

    def test_toml_config_file(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "potd.toml"
            path.write_text('[source]\nendpoint = "https://mirror.test"\n', encoding="utf-8")

            with patch.dict(os.environ, {ENDPOINT_ENV_VAR: ""}, clear=False):
                config = load_config(path)

        self.assertEqual(config.source.endpoint, "https://mirror.test")

    def test_env_endpoint_override(self) -> None:
        with patch.dict(os.environ, {ENDPOINT_ENV_VAR: "https://env.test"}, clear=False):
            config = load_config()
            explicit = load_config(overrides={"source.endpoint": "https://cli.test"})

        self.assertEqual(config.source.endpoint, "https://env.test")
        self.assertEqual(explicit.source.endpoint, "https://cli.test")

    def test_invalid_values_raise_config_error(self) -> None:
        with patch.dict(os.environ, {ENDPOINT_ENV_VAR: ""}, clear=False):
            with self.assertRaises(ConfigError):
                load_config(overrides={"source.retries": 0})
            with self.assertRaises(ConfigError):
                load_config(overrides={"runtime.clock": "mars"})

    def test_missing_or_unsupported_files(self) -> None:
        with TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigError):
                load_config(Path(tmpdir) / "missing.yaml")

            ini = Path(tmpdir) / "potd.ini"
            ini.write_text("[source]\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(ini)

            broken = Path(tmpdir) / "broken.json"
            broken.write_text("{", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(broken)

    def test_dump_example_config_yaml(self) -> None:
        with TemporaryDirectory() as tmpdir:
            dest = Path(tmpdir) / "example.yaml"
            dump_example_config(dest)
            data = yaml.safe_load(dest.read_text(encoding="utf-8"))

        self.assertIn("source", data)
        self.assertIn("runtime", data)

    def test_dump_example_config_json(self) -> None:
        with TemporaryDirectory() as tmpdir:
            dest = Path(tmpdir) / "nested" / "example.json"
            dump_example_config(dest)
            data = json.loads(dest.read_text(encoding="utf-8"))

        self.assertEqual(data["archive"]["flatten"], True)

    def test_dump_example_config_rejects_toml(self) -> None:
        with TemporaryDirectory() as tmpdir:
            dest = Path(tmpdir) / "config.toml"
            with self.assertRaises(ConfigError):
                dump_example_config(dest)


if __name__ == "__main__":
    unittest.main()
