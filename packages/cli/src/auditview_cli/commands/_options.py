"""Options and helpers shared by the report and summary commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.text import Text

from auditview_core.config import DEFAULT_CONFIG
from auditview_core.models import Category

console = Console()

type_option = click.option(
    "--type",
    "types",
    multiple=True,
    type=click.Choice([c.value for c in Category]),
    help="Only show findings of this type. Repeatable.",
)
level_option = click.option("--level", "levels", multiple=True, help="Only show findings at this level. Repeatable.")
dir_option = click.option(
    "--dir", "directory", default=None, help="Report directory. Overrides reports_dir from the config file."
)


def config_with_dir(ctx: click.Context, directory: str | None) -> dict:
    config = dict(ctx.obj["config"]) if ctx.obj else dict(DEFAULT_CONFIG)
    if directory:
        config["reports_dir"] = directory
    return config


def print_warnings(warnings) -> None:
    for w in warnings:
        console.print(Text(f"Warning: {w}", style="yellow"))
