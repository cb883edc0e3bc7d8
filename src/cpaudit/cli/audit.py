"""CLI command: cpaudit audit — associated objects plus inbound/outbound rules."""

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
@click.option(
    "--acls",
    "-a",
    "acls_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Rule-base export (JSON array).",
)
@target_option
@format_option
@click.pass_context
def audit(
    ctx: click.Context,
    objects_path: str,
    acls_path: str,
    target: str,
    output_format: str,
) -> None:
    """Show what TARGET belongs to and which rules reference it."""
    engine = AuditEngine(load_config(ctx))
    try:
        result = engine.run(objects_path, target, acls_path)
        if output_format == "json":
            click.echo(
                report.to_json(
                    target,
                    result.associated,
                    result.catalog,
                    inbound=result.inbound,
                    outbound=result.outbound,
                )
            )
            return

        tables = [
            report.objects_table(target, result.associated),
            report.rules_table(
                report.outbound_title(target), result.outbound or [], result.catalog
            ),
            report.rules_table(
                report.inbound_title(target), result.inbound or [], result.catalog
            ),
        ]
    except AuditError as exc:
        fail(exc)

    for i, table in enumerate(tables):
        if i:
            out.print()
        out.print(table)
