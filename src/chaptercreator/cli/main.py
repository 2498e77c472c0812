"""Root CLI group for Chapter Creator."""

from __future__ import annotations

import click

from chaptercreator import __version__


@click.group()
@click.version_option(version=__version__, prog_name="chaptercreator")
def cli() -> None:
    """Chapter Creator — chapter files from media segments."""


# Import and register subcommands
from chaptercreator.cli.init_cmd import init_cmd  # noqa: E402
from chaptercreator.cli.run_cmd import run_cmd  # noqa: E402
from chaptercreator.cli.show_cmd import show_cmd  # noqa: E402

cli.add_command(init_cmd, "init")
cli.add_command(run_cmd, "run")
cli.add_command(show_cmd, "show")
