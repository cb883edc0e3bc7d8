"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from cpaudit import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cpaudit")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to a YAML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """cpaudit — object relationship and rule-base audit for firewall policy exports."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from cpaudit.cli.audit import audit  # noqa: F811
    from cpaudit.cli.related import related  # noqa: F811

    main.add_command(audit)
    main.add_command(related)


_register_commands()
