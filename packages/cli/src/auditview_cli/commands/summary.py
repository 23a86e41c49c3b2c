"""summary command — count findings per type and level."""

from __future__ import annotations

from collections import Counter

import click
from rich.markup import escape
from rich.table import Table

from auditview_cli.commands._options import (
    config_with_dir,
    console,
    dir_option,
    level_option,
    print_warnings,
    type_option,
)
from auditview_core.engine import collect_records
from auditview_core.filters import apply_filters
from auditview_core.models import Category, FilterSelection


@click.command("summary")
@dir_option
@type_option
@level_option
@click.pass_context
def summary_cmd(ctx, directory, types, levels):
    """Show how many findings there are per type and per level.

    The same type/level filters as `report` apply, so this also lists the
    levels available to filter on.
    """
    config = config_with_dir(ctx, directory)
    records, _, warnings = collect_records(
        config["reports_dir"],
        recursive=config["recursive"],
        strict=config["strict"],
        map_file=config["map_file"],
    )
    print_warnings(warnings)

    records = apply_filters(records, FilterSelection.from_lists(types, levels))
    if not records:
        console.print("[yellow]No findings.[/yellow]")
        return

    type_counter: Counter[str] = Counter(r.category.value for r in records)
    level_counter: Counter[str] = Counter(r.level for r in records)
    total = len(records)

    console.print(f"\n[bold]Findings in [cyan]{escape(str(config['reports_dir']))}[/cyan][/bold]")
    console.print(f"  Total findings: {total}")

    type_table = Table(title="By Type", show_header=True)
    type_table.add_column("Type", style="bold")
    type_table.add_column("Count", justify="right")
    type_table.add_column("% of total", justify="right")
    for category in Category:
        count = type_counter.get(category.value, 0)
        type_table.add_row(category.value, str(count), f"{count / total * 100:.1f}%")
    console.print(type_table)

    level_table = Table(title="By Level", show_header=True)
    level_table.add_column("Level", style="bold")
    level_table.add_column("Count", justify="right")
    for level, count in level_counter.most_common():
        level_table.add_row(escape(level), str(count))
    console.print(level_table)
