"""chaptercreator show — preview or inspect the chapters of one item."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from chaptercreator.chapters.timefmt import parse_time
from chaptercreator.models.config import TICKS_PER_SECOND
from chaptercreator.utils.progress import log_error, log_warning

console = Console()


@click.command()
@click.argument("item_id")
@click.option(
    "--segments", "-s",
    default=None,
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
@click.option(
    "--from-file",
    is_flag=True,
    help="Read the chapter file already written next to the media file",
)
def show_cmd(
    item_id: str,
    segments: str | None,
    catalog: str,
    config_file: str | None,
    from_file: bool,
) -> None:
    """Show the chapters ITEM_ID would get, without writing anything.

    With --from-file, show the chapters stored in the existing chapter file
    instead.
    """
    from chaptercreator.chapters.writer import chapter_path_for, read_chapter_file
    from chaptercreator.library.catalog import FileCatalog, load_segments
    from chaptercreator.models.config import load_config
    from chaptercreator.pipeline.dispatcher import group_segments
    from chaptercreator.pipeline.manager import ChapterManager

    if not from_file and segments is None:
        log_error("--segments is required unless --from-file is given")
        raise SystemExit(1)

    try:
        config = load_config(config_file)
        media_catalog = FileCatalog.load(catalog)
        item = media_catalog.get_item(item_id)
        if from_file:
            if item is None or not item.path:
                log_error(f"No media path for {item_id}")
                raise SystemExit(1)
            chapters = read_chapter_file(chapter_path_for(item.path))
        else:
            groups = group_segments(load_segments(segments))
            manager = ChapterManager(media_catalog, config)
            chapters = manager.to_chapters(item_id, groups.get(item_id, []))
    except (ValidationError, ValueError, OSError, ET.ParseError) as e:
        log_error(f"Invalid input: {e}")
        raise SystemExit(1)

    if not chapters:
        log_warning(f"No chapters for {item_id}")
        return

    title = item.path if item and item.path else item_id

    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Length", justify="right")
    table.add_column("Title", style="bold")

    for i, chapter in enumerate(chapters, start=1):
        seconds = (parse_time(chapter.end_time) - parse_time(chapter.start_time)) / TICKS_PER_SECOND
        table.add_row(str(i), chapter.start_time, chapter.end_time, f"{seconds:.2f}s", chapter.title)

    console.print(table)
