"""chaptercreator run — create chapter files for every item in a segment dump."""

from __future__ import annotations

import signal
import threading
import time

import click
from pydantic import ValidationError
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from chaptercreator.utils.progress import console, log_error, set_verbose, show_run_summary


@click.command()
@click.option(
    "--segments", "-s",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Segment dump (JSON or YAML)",
)
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Media catalog (JSON or YAML)",
)
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to chaptercreator.yaml",
)
@click.option("--force", is_flag=True, help="Overwrite existing chapter files")
@click.option("--parallelism", "-j", default=None, type=int, help="Override max parallelism")
@click.option("--verbose", "-v", is_flag=True, help="Show per-item details")
def run_cmd(
    segments: str,
    catalog: str,
    config_file: str | None,
    force: bool,
    parallelism: int | None,
    verbose: bool,
) -> None:
    """Create chapter files for all items in SEGMENTS."""
    from chaptercreator.library.catalog import FileCatalog, load_segments
    from chaptercreator.models.config import BatchPolicy, load_config
    from chaptercreator.pipeline.dispatcher import BatchDispatcher
    from chaptercreator.pipeline.manager import ChapterManager

    set_verbose(verbose)

    try:
        config = load_config(config_file)
        if parallelism is not None:
            config.batch = BatchPolicy(
                overwrite_existing=config.batch.overwrite_existing,
                max_parallelism=parallelism,
            )
        media_catalog = FileCatalog.load(catalog)
        segment_list = load_segments(segments)
    except (ValidationError, ValueError, OSError) as e:
        log_error(f"Invalid input: {e}")
        raise SystemExit(1)

    dispatcher = BatchDispatcher(ChapterManager(media_catalog, config))
    cancel = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda *_: cancel.set())

    started = time.monotonic()
    try:
        with Progress(
            TextColumn("[bold cyan]Chapters[/bold cyan]"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as bar:
            task = bar.add_task("chapters", total=100)
            result = dispatcher.run(
                segment_list,
                force_overwrite=force,
                cancel=cancel,
                progress=lambda pct: bar.update(task, completed=pct),
            )
    except Exception as e:
        log_error(f"Batch failed: {e}")
        raise SystemExit(1)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    details = {"Items": result.total}
    details.update({k.replace("_", " ").capitalize(): v for k, v in sorted(result.counts.items())})
    show_run_summary("Chapter Run", time.monotonic() - started, details)

    if result.failed or result.cancelled:
        raise SystemExit(1)
