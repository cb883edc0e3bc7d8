"""CLI command: cpaudit related — associated objects only, no rule base needed."""

from __future__ import annotations

import click
from rich.console import Console

from cpaudit import report
from cpaudit.cli.common import fail, format_option, load_config, objects_option, target_option
from cpaudit.engine import AuditEngine
from cpaudit.errors import AuditError

out = Console()


@click.command()
@objects_option
@target_option
@format_option
@click.pass_context
def related(
    ctx: click.Context,
    objects_path: str,
    target: str,
    output_format: str,
) -> None:
    """List the networks and groups TARGET is attached to."""
    engine = AuditEngine(load_config(ctx))
    try:
        result = engine.run(objects_path, target)
        if output_format == "json":
            click.echo(report.to_json(target, result.associated, result.catalog))
            return
        table = report.objects_table(target, result.associated)
    except AuditError as exc:
        fail(exc)

    out.print(table)
