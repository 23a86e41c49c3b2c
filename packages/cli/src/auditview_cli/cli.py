"""CLI entry point for auditview.

Commands:
  report   — show one filtered, sorted page of audit findings
  summary  — count findings per type and level
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from auditview_cli.commands.report import report_cmd
from auditview_cli.commands.summary import summary_cmd

console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    """Route auditview_core log records through rich on stderr."""
    logger = logging.getLogger("auditview_core")
    logger.handlers.clear()
    handler = RichHandler(console=console, show_time=False, show_path=verbose, markup=False)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    logger.propagate = False


@click.group()
@click.version_option(package_name="auditview", prog_name="auditview")
@click.option(
    "--config",
    "config_path",
    default=".auditview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="AUDITVIEW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output from the report engine.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Browse accessibility, HTML5 and broken-link audit reports."""
    from auditview_core.config import load_config
    from auditview_core.errors import ConfigError

    ctx.ensure_object(dict)
    _setup_logging(verbose)

    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(f"Invalid configuration: {e}")


main.add_command(report_cmd)
main.add_command(summary_cmd)
