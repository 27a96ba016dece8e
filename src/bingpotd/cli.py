"""Command-line entry points for bingpotd."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

from bingpotd.config import ConfigError, dump_example_config, load_config
from bingpotd.cycle import run_cycle
from bingpotd.errors import PotdError
from bingpotd.util.dates import picture_date
from bingpotd.util.logging import configure_logging

app = typer.Typer(add_completion=False, help="Fetch and archive the Bing picture of the day")

CONFIG_ERROR_EXIT_CODE = 2


@app.command()
def run(
    download_dir: Optional[Path] = typer.Argument(None, help="Directory receiving today's picture"),
    archive_dir: Optional[Path] = typer.Argument(None, help="Directory receiving earlier pictures"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML/TOML/JSON config file"),
    endpoint: Optional[str] = typer.Option(None, help="Metadata endpoint returning {'url': ...}"),
    log_file: Optional[Path] = typer.Option(None, help="Also log to this file"),
    manifest_root: Optional[Path] = typer.Option(None, help="Write a run manifest under ROOT/logs/run_manifests"),
    mirror: bool = typer.Option(False, "--mirror", help="Mirror subdirectories in the archive instead of flattening"),
    keep_going: bool = typer.Option(False, "--keep-going", help="Continue past files that fail to archive"),
) -> None:
    """Run one cycle: resolve the URL, archive old files, download today's picture."""

    overrides: dict[str, Any] = {}
    if endpoint:
        overrides["source.endpoint"] = endpoint
    if log_file:
        overrides["runtime.log_file"] = log_file
    if manifest_root:
        overrides["runtime.manifest_root"] = manifest_root
    if mirror:
        overrides["archive.flatten"] = False
    if keep_going:
        overrides["archive.fail_fast"] = False

    try:
        cfg = load_config(config, overrides=overrides)
    except ConfigError as exc:
        typer.echo(f"config failed: {exc}", err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc

    logger = configure_logging(log_path=cfg.runtime.log_file)

    try:
        result = run_cycle(cfg, download_dir=download_dir, archive_dir=archive_dir, logger=logger)
    except PotdError as exc:
        logger.error("%s failed: %s", exc.stage, exc)
        typer.echo(f"{exc.stage} failed: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code) from exc

    typer.echo(f"Downloaded picture of the day for {picture_date(result.run_date)} -> {result.picture_path}")


@app.command()
def dump_config(
    dest: Path = typer.Argument(..., help="Destination .yaml/.yml/.json file"),
) -> None:
    """Write the default configuration so it can be edited."""

    try:
        dump_example_config(dest)
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc
    typer.echo(f"Wrote {dest}")


def main() -> None:
    app()


__all__ = ["main", "app"]
