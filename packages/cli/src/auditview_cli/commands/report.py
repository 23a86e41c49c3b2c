"""report command — show one page of audit findings."""

from __future__ import annotations

import json

import click
from rich.style import Style
from rich.table import Table
from rich.text import Text

from auditview_cli.commands._options import (
    config_with_dir,
    console,
    dir_option,
    level_option,
    print_warnings,
    type_option,
)
from auditview_core.engine import list_reports_from_config
from auditview_core.models import SORT_FIELDS, Category, FilterSelection, ReportPage, SortSelection

_CATEGORY_STYLE = {
    Category.ACCESSIBILITY.value: "magenta",
    Category.HTML5.value: "cyan",
    Category.LINK.value: "red",
}


def _render_page(page: ReportPage) -> None:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("URL", max_width=50)
    table.add_column("Type", width=14)
    table.add_column("Level", width=10)
    table.add_column("Message")

    for row in page.rows:
        style = _CATEGORY_STYLE.get(row.category, "white")
        table.add_row(
            Text(row.label, style=Style(link=row.target)),
            Text(row.category, style=style),
            Text(row.level),
            Text(row.message),
        )

    console.print(table)
    if page.page_count:
        console.print(f"Page {page.page + 1} of {page.page_count} ({page.total} findings)")
    else:
        console.print("[yellow]No findings.[/yellow]")


@click.command("report")
@dir_option
@type_option
@level_option
@click.option("--order", default="", help=f"Field to sort by ({', '.join(SORT_FIELDS)}).")
@click.option("--sort", "direction", type=click.Choice(["asc", "desc"]), default="asc", show_default=True)
@click.option("--page", type=click.IntRange(min=0), default=0, show_default=True, help="Page to show, 0-indexed.")
@click.option("--json", "as_json", is_flag=True, help="Print the page as JSON instead of a table.")
@click.pass_context
def report_cmd(ctx, directory, types, levels, order: str, direction: str, page: int, as_json: bool):
    """Show one page of findings from the audit reports directory.

    Filenames are replaced with the source URLs listed in the directory's
    map file. Sorting applies to the rows on the page shown unless
    global_sort is enabled in the config file.
    """
    config = config_with_dir(ctx, directory)
    result = list_reports_from_config(
        config,
        selection=FilterSelection.from_lists(types, levels),
        sort=SortSelection(order=order, direction=direction),
        page=page,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    print_warnings(result.warnings)
    _render_page(result)
