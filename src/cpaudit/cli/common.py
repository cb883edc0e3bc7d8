"""Helpers shared by the CLI commands."""

from __future__ import annotations

import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from cpaudit.config import AuditConfig
from cpaudit.errors import AuditError

console = Console(stderr=True)

objects_option = click.option(
    "--objects",
    "-o",
    "objects_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Object export (JSON array).",
)
target_option = click.option(
    "--target",
    "-t",
    required=True,
    help="Name of the object to audit.",
)
format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)


def load_config(ctx: click.Context) -> AuditConfig:
    try:
        config = AuditConfig.load(ctx.obj.get("config_path"))
    except AuditError as exc:
        fail(exc)
    return config


def fail(exc: AuditError) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
    sys.exit(1)
