"""chaptercreator init — write a default configuration file."""

from __future__ import annotations

from pathlib import Path

import click

from chaptercreator.models.config import ChapterCreatorConfig, save_config
from chaptercreator.utils.progress import log_error, log_success


@click.command()
@click.option(
    "--output", "-o",
    default="chaptercreator.yaml",
    type=click.Path(),
    help="Where to write the configuration",
)
@click.option("--max-gap", default=3, type=int, help="Gap threshold in seconds")
@click.option("--parallelism", default=2, type=int, help="Max parallel workers")
@click.option("--force", is_flag=True, help="Replace an existing configuration file")
def init_cmd(output: str, max_gap: int, parallelism: int, force: bool) -> None:
    """Write a configuration file with default chapter labels."""
    config_path = Path(output).resolve()
    if config_path.exists() and not force:
        log_error(f"Config already exists: {config_path} (use --force to replace)")
        raise SystemExit(1)

    config = ChapterCreatorConfig(
        synthesis={"max_gap_seconds": max_gap},
        batch={"max_parallelism": parallelism},
    )
    save_config(config_path, config)

    log_success(f"Config written: {config_path}")
    click.echo(
        f"\nNext: chaptercreator run --config {config_path.name} "
        "--segments segments.json --catalog catalog.yaml"
    )
